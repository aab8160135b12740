"""
访问记录存储接口定义

定义持久化层的抽象接口，判定逻辑只依赖此接口，不绑定具体数据库。
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class IVisitStore(ABC):
    """
    访问记录存储抽象接口

    每次写入一行，返回数据库生成的主键。
    """

    @abstractmethod
    def insert(self, table_name: str, fields: dict[str, str]) -> int:
        """
        写入一行访问记录

        Args:
            table_name: 目标表名
            fields: 字段名到字段值的映射

        Returns:
            新记录的主键 ID

        Raises:
            StorageError: 写入失败时抛出
        """
        pass
