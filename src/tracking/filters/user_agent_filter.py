"""
User-Agent 过滤器

排除没有 User-Agent 的请求，以及命中黑名单的爬虫、脚本和监控请求。
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional, Union

from src.core.config import DEFAULT_USER_AGENT_BLACKLIST

from .base_filter import BaseFilter, FilterResult

if TYPE_CHECKING:
    from ..models import RequestContext


# 黑名单条目: 普通字符串按不区分大小写的子串匹配，正则按 search 匹配
BlacklistEntry = Union[str, re.Pattern]


@dataclass
class BlacklistMatch:
    """
    黑名单匹配结果

    Attributes:
        matched: 是否匹配
        matched_rule: 匹配的规则
    """
    matched: bool
    matched_rule: str = ""


def match_user_agent(
    user_agent: str,
    blacklist: Iterable[BlacklistEntry],
) -> BlacklistMatch:
    """
    按顺序检查 User-Agent 是否命中黑名单

    Args:
        user_agent: 原始 User-Agent
        blacklist: 黑名单条目

    Returns:
        BlacklistMatch: 第一个命中的条目
    """
    lowered = user_agent.lower()
    for entry in blacklist:
        if isinstance(entry, re.Pattern):
            if entry.search(user_agent):
                return BlacklistMatch(matched=True, matched_rule=entry.pattern)
        elif entry and entry.lower() in lowered:
            return BlacklistMatch(matched=True, matched_rule=entry)
    return BlacklistMatch(matched=False)


class UserAgentFilter(BaseFilter):
    """
    User-Agent 过滤器

    Attributes:
        blacklist: 默认黑名单(按顺序匹配)
    """

    def __init__(
        self,
        blacklist: Optional[list[BlacklistEntry]] = None,
        enabled: bool = True,
    ) -> None:
        """
        初始化 User-Agent 过滤器

        Args:
            blacklist: 黑名单条目，None 时使用内置列表
            enabled: 是否启用
        """
        super().__init__(name="user_agent", enabled=enabled)

        self._blacklist: list[BlacklistEntry] = list(
            DEFAULT_USER_AGENT_BLACKLIST if blacklist is None else blacklist
        )

        # 扩展统计
        self._stats.update({
            "missing_user_agent": 0,
            "blacklist_hits": 0,
        })

    def _do_check(self, context: RequestContext) -> FilterResult:
        return self._check_user_agent(context, self._blacklist)

    def check_with_blacklist(
        self,
        context: RequestContext,
        blacklist: list[BlacklistEntry],
    ) -> FilterResult:
        """
        使用调用方提供的黑名单进行检查

        Args:
            context: 请求上下文
            blacklist: 本次检查使用的黑名单

        Returns:
            FilterResult: 过滤结果
        """
        if not self._enabled:
            return FilterResult.passed(self.name)

        self._stats["total_checked"] += 1
        result = self._check_user_agent(context, blacklist)
        if result.should_skip:
            self._stats["total_skipped"] += 1
        return result

    def _check_user_agent(
        self,
        context: RequestContext,
        blacklist: Iterable[BlacklistEntry],
    ) -> FilterResult:
        user_agent = context.user_agent
        if not user_agent:
            self._stats["missing_user_agent"] += 1
            return FilterResult.skipped(
                filter_name=self.name,
                reason="缺少 User-Agent",
            )

        match = match_user_agent(user_agent, blacklist)
        if match.matched:
            self._stats["blacklist_hits"] += 1
            return FilterResult.skipped(
                filter_name=self.name,
                reason=f"User-Agent 命中黑名单: {match.matched_rule}",
                matched_rule=f"blacklist:{match.matched_rule}",
            )

        return FilterResult.passed(self.name)

    def is_blacklisted(self, user_agent: str) -> bool:
        """快速检查 User-Agent 是否在默认黑名单中"""
        return match_user_agent(user_agent, self._blacklist).matched

    def add_entry(self, entry: BlacklistEntry) -> None:
        """添加条目到黑名单末尾"""
        self._blacklist.append(entry)

    def remove_entry(self, entry: BlacklistEntry) -> bool:
        """
        从黑名单移除条目

        Returns:
            是否成功移除
        """
        if entry in self._blacklist:
            self._blacklist.remove(entry)
            return True
        return False

    @property
    def blacklist(self) -> list[BlacklistEntry]:
        """获取黑名单"""
        return self._blacklist.copy()
