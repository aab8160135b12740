"""
访问记录模型

判定通过后生成的规范化记录，即写入存储的一行数据。
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class VisitRecord:
    """
    单次页面访问记录

    created 只精确到日，便于下游按天汇总。

    Attributes:
        created: 访问日期
        target: 请求路径
        referrer: 来源地址，无来源时为空字符串
    """
    created: date
    target: str
    referrer: str = ""

    def to_fields(self) -> dict[str, str]:
        """转换为存储层字段映射"""
        return {
            "created": self.created.isoformat(),
            "referrer": self.referrer,
            "target": self.target,
        }
