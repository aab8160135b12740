"""
访问统计排除规则

按顺序执行的内置规则，第一个命中的规则决定排除原因。
"""

from .base_filter import BaseFilter, FilterResult
from .request_flag_filter import EXCLUDING_FLAGS, RequestFlagFilter
from .target_filter import TargetFilter
from .user_agent_filter import (
    BlacklistEntry,
    BlacklistMatch,
    UserAgentFilter,
    match_user_agent,
)

__all__ = [
    "BaseFilter",
    "FilterResult",
    "TargetFilter",
    "UserAgentFilter",
    "BlacklistEntry",
    "BlacklistMatch",
    "match_user_agent",
    "RequestFlagFilter",
    "EXCLUDING_FLAGS",
]
