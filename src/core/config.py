"""
运行配置

从环境变量(可选 .env 文件)读取访问统计的运行配置。

环境变量:
    TRACKER_DB_PATH        SQLite 数据库路径 (默认 data/statify.db)
    TRACKER_TABLE          访问记录表名 (默认 statify)
    TRACKER_UA_BLACKLIST   逗号分隔的 User-Agent 黑名单，留空使用内置列表
    TRACKER_SKIP_LOGGED_IN 是否排除已登录用户 (默认 true)
    TRACKER_SITE_URL       站点首页地址，用于清除站内来源
    TRACKER_LOG_LEVEL      日志级别 (默认 INFO)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional
from urllib.parse import urlsplit

from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .logger import DEFAULT_LOG_LEVEL, parse_log_level

DEFAULT_DB_PATH = Path("data") / "statify.db"
DEFAULT_TABLE_NAME = "statify"

# 默认 User-Agent 黑名单 - 不区分大小写的子串匹配
DEFAULT_USER_AGENT_BLACKLIST = [
    # 通用爬虫标识
    "bot",
    "crawl",
    "spider",
    "slurp",
    "archiver",
    "facebookexternalhit",

    # 命令行工具和脚本库
    "curl",
    "wget",
    "python-requests",
    "python-urllib",
    "go-http-client",
    "java/",
    "libwww-perl",
    "httpclient",

    # 监控和预取
    "pingdom",
    "uptime",
    "headlesschrome",
    "lighthouse",
]

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    """解析布尔型环境变量"""
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"无效的布尔配置: {name}={raw!r}",
        details={"name": name, "value": raw},
    )


def _parse_list(raw: str) -> list[str]:
    """解析逗号分隔列表，忽略空项"""
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class TrackerSettings:
    """
    访问统计配置

    Attributes:
        db_path: SQLite 数据库路径
        table_name: 访问记录表名
        user_agent_blacklist: User-Agent 黑名单
        skip_logged_in: 是否排除已登录用户
        site_url: 站点首页地址(可选)
        log_level: 日志级别
    """
    db_path: Path = DEFAULT_DB_PATH
    table_name: str = DEFAULT_TABLE_NAME
    user_agent_blacklist: list[str] = field(
        default_factory=lambda: list(DEFAULT_USER_AGENT_BLACKLIST)
    )
    skip_logged_in: bool = True
    site_url: Optional[str] = None
    log_level: int = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        """验证配置"""
        if not self.table_name.isidentifier():
            raise ConfigurationError(
                f"无效的表名: {self.table_name!r}",
                details={"table_name": self.table_name},
            )
        if self.site_url is not None:
            site = urlsplit(self.site_url)
            if not site.scheme or not site.hostname:
                raise ConfigurationError(
                    f"无效的站点地址: {self.site_url!r}，需要包含协议和主机名",
                    details={"site_url": self.site_url},
                )
        self.db_path = Path(self.db_path)

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        dotenv_path: Optional[Path] = None,
    ) -> TrackerSettings:
        """
        从环境变量创建配置

        Args:
            env: 环境变量映射，默认使用 os.environ
            dotenv_path: 可选的 .env 文件路径，存在时先加载到 os.environ

        Returns:
            TrackerSettings 实例

        Raises:
            ConfigurationError: 配置取值无效时抛出
        """
        if env is None:
            if dotenv_path is not None:
                load_dotenv(dotenv_path)
            env = os.environ

        kwargs: dict = {}

        if env.get("TRACKER_DB_PATH"):
            kwargs["db_path"] = Path(env["TRACKER_DB_PATH"])
        if env.get("TRACKER_TABLE"):
            kwargs["table_name"] = env["TRACKER_TABLE"].strip()

        blacklist = _parse_list(env.get("TRACKER_UA_BLACKLIST", ""))
        if blacklist:
            kwargs["user_agent_blacklist"] = blacklist

        if env.get("TRACKER_SKIP_LOGGED_IN"):
            kwargs["skip_logged_in"] = _parse_bool(
                "TRACKER_SKIP_LOGGED_IN", env["TRACKER_SKIP_LOGGED_IN"]
            )
        if env.get("TRACKER_SITE_URL"):
            kwargs["site_url"] = env["TRACKER_SITE_URL"].strip()

        raw_level = env.get("TRACKER_LOG_LEVEL")
        if raw_level:
            name = raw_level.strip().upper()
            if not name.isdigit() and not isinstance(logging.getLevelName(name), int):
                raise ConfigurationError(
                    f"无效的日志级别: {raw_level!r}",
                    details={"name": "TRACKER_LOG_LEVEL", "value": raw_level},
                )
            kwargs["log_level"] = parse_log_level(raw_level)

        return cls(**kwargs)
