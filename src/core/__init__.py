"""
core核心模块

提供系统基础设施，包括异常定义、配置读取、接口规范、日志工具等。
"""

from .config import DEFAULT_USER_AGENT_BLACKLIST, TrackerSettings
from .exceptions import (
    ConfigurationError,
    StorageConnectionError,
    StorageError,
    StorageWriteError,
    TrackingError,
    VisitTrackerError,
)
from .logger import get_logger, parse_log_level, setup_logging

__all__ = [
    # 异常类
    "VisitTrackerError",
    "ConfigurationError",
    "TrackingError",
    "StorageError",
    "StorageConnectionError",
    "StorageWriteError",
    # 配置
    "TrackerSettings",
    "DEFAULT_USER_AGENT_BLACKLIST",
    # 日志工具
    "get_logger",
    "parse_log_level",
    "setup_logging",
]
