"""
统计结果模型

定义 VisitTracker 的最终输出。判定结果与存储结果分开上报，
调用方可以区分"按规则排除"和"应当记录但写入失败"。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from .visit_record import VisitRecord


class TrackStatus(str, Enum):
    """
    统计结果类型枚举
    """
    TRACKED = "tracked"                 # 已记录
    EXCLUDED = "excluded"               # 被排除规则或钩子排除
    STORAGE_FAILED = "storage_failed"   # 应当记录但写入失败
    FAILED = "failed"                   # 判定过程出错(如钩子抛出异常)


@dataclass
class TrackResult:
    """
    单次请求的统计结果

    Attributes:
        status: 结果类型
        record: 生成的访问记录(排除时为 None)
        record_id: 存储层返回的主键(仅 TRACKED)
        filter_name: 触发排除的规则名称
        reason: 结果原因说明
        error: 存储失败或判定失败的错误信息
        created_at: 结果创建时间
    """
    status: TrackStatus
    record: Optional[VisitRecord] = None
    record_id: Optional[int] = None
    filter_name: Optional[str] = None
    reason: str = ""
    error: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def create_tracked(
        cls,
        record: VisitRecord,
        record_id: int,
        reason: str = "访问已记录",
    ) -> TrackResult:
        """创建已记录结果"""
        return cls(
            status=TrackStatus.TRACKED,
            record=record,
            record_id=record_id,
            reason=reason,
        )

    @classmethod
    def create_excluded(
        cls,
        filter_name: str,
        reason: str = "",
    ) -> TrackResult:
        """创建排除结果"""
        return cls(
            status=TrackStatus.EXCLUDED,
            filter_name=filter_name,
            reason=reason or f"被规则 {filter_name} 排除",
        )

    @classmethod
    def create_storage_failed(
        cls,
        record: VisitRecord,
        error: str,
    ) -> TrackResult:
        """创建存储失败结果"""
        return cls(
            status=TrackStatus.STORAGE_FAILED,
            record=record,
            reason="访问应当记录，但写入失败",
            error=error,
        )

    @classmethod
    def create_failed(cls, error: str) -> TrackResult:
        """创建判定失败结果"""
        return cls(
            status=TrackStatus.FAILED,
            reason="判定过程出错，未写入",
            error=error,
        )

    @property
    def should_track(self) -> bool:
        """判定结果是否为应当记录(与存储是否成功无关)"""
        return self.status in (TrackStatus.TRACKED, TrackStatus.STORAGE_FAILED)

    @property
    def is_tracked(self) -> bool:
        """是否已成功写入"""
        return self.status == TrackStatus.TRACKED

    def to_dict(self) -> dict:
        """转换为字典格式"""
        return {
            "status": self.status.value,
            "record": self.record.to_fields() if self.record else None,
            "record_id": self.record_id,
            "filter_name": self.filter_name,
            "reason": self.reason,
            "error": self.error,
            "created_at": self.created_at.isoformat(),
            "should_track": self.should_track,
        }
