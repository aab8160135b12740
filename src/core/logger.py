"""
日志工具模块

提供统一的日志配置和获取接口，确保全项目日志格式一致。
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional


# 日志格式常量
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# 默认日志级别
DEFAULT_LOG_LEVEL = logging.INFO


def parse_log_level(value: str | int | None) -> int:
    """
    将日志级别名称转换为 logging 常量

    Args:
        value: 级别名称(如 "DEBUG")、数值、数字字符串(如 "10")或 None

    Returns:
        logging 级别常量，无法识别时返回默认级别
    """
    if value is None or value == "":
        return DEFAULT_LOG_LEVEL
    if isinstance(value, int):
        return value
    name = value.strip().upper()
    if name.isdigit():
        return int(name)
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else DEFAULT_LOG_LEVEL


def setup_logging(
    level: int = DEFAULT_LOG_LEVEL,
    log_file: Optional[Path] = None,
    log_format: str = LOG_FORMAT,
) -> None:
    """
    配置全局日志设置

    Args:
        level: 日志级别，默认INFO
        log_file: 可选的日志文件路径，为None时只输出到控制台
        log_format: 日志格式字符串
    """
    handlers: list[logging.Handler] = []

    # 控制台处理器
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(log_format, LOG_DATE_FORMAT))
    handlers.append(console_handler)

    # 文件处理器（如果指定了日志文件）
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(log_format, LOG_DATE_FORMAT))
        handlers.append(file_handler)

    # 配置根日志器
    logging.basicConfig(
        level=level,
        handlers=handlers,
        format=log_format,
        datefmt=LOG_DATE_FORMAT,
    )


def get_logger(name: str) -> logging.Logger:
    """
    获取指定名称的日志器

    Args:
        name: 日志器名称，通常使用 __name__

    Returns:
        配置好的日志器实例

    Example:
        logger = get_logger(__name__)
        logger.info("记录访问")
    """
    return logging.getLogger(name)
