"""
访问统计自定义异常

定义系统中使用的所有异常类，遵循层级结构便于精确捕获和处理错误。
"""

from __future__ import annotations


class VisitTrackerError(Exception):
    """
    所有访问统计异常的基类

    所有模块特定异常都应继承此类，以便统一捕获和处理。
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        初始化异常

        Args:
            message: 错误信息描述
            details: 可选的详细信息字典，用于调试
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | 详情: {self.details}"
        return self.message


class ConfigurationError(VisitTrackerError):
    """
    配置相关错误

    当环境变量格式错误或配置项取值无效时抛出。
    """
    pass


class TrackingError(VisitTrackerError):
    """
    访问判定错误

    判定过程中出现非预期异常（例如钩子回调抛错）时抛出。
    被排除规则过滤不属于错误。
    """
    pass


class StorageError(VisitTrackerError):
    """
    存储层错误

    当访问记录写入失败时抛出。
    """
    pass


class StorageConnectionError(StorageError):
    """
    存储连接错误

    当无法打开数据库或连接尚未建立时抛出。
    """
    pass


class StorageWriteError(StorageError):
    """
    存储写入错误

    当 INSERT / 建表语句执行失败时抛出。
    """
    pass
