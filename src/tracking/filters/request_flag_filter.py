"""
请求标志过滤器

根据宿主环境提供的标志排除非页面访问: 订阅、Trackback、404、
robots.txt、已登录用户、预览和站内搜索。
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base_filter import BaseFilter, FilterResult

if TYPE_CHECKING:
    from ..models import RequestContext


# 标志检查顺序
EXCLUDING_FLAGS = (
    "is_feed",
    "is_trackback",
    "is_404",
    "is_robots",
    "is_user_logged_in",
    "is_preview",
    "is_search",
)


class RequestFlagFilter(BaseFilter):
    """
    请求标志过滤器

    Attributes:
        skip_logged_in: 是否排除已登录用户的访问
    """

    def __init__(self, skip_logged_in: bool = True, enabled: bool = True) -> None:
        """
        初始化请求标志过滤器

        Args:
            skip_logged_in: 为 False 时已登录用户的访问照常统计
            enabled: 是否启用
        """
        super().__init__(name="request_flags", enabled=enabled)
        self._skip_logged_in = skip_logged_in
        self._stats.update({flag: 0 for flag in EXCLUDING_FLAGS})

    def _do_check(self, context: RequestContext) -> FilterResult:
        flags = context.flags
        for flag in EXCLUDING_FLAGS:
            if flag == "is_user_logged_in" and not self._skip_logged_in:
                continue
            if getattr(flags, flag):
                self._stats[flag] += 1
                return FilterResult.skipped(
                    filter_name=self.name,
                    reason=f"请求标志 {flag} 为真",
                    matched_rule=flag,
                )
        return FilterResult.passed(self.name)

    @property
    def skip_logged_in(self) -> bool:
        """是否排除已登录用户"""
        return self._skip_logged_in

    @skip_logged_in.setter
    def skip_logged_in(self, value: bool) -> None:
        """设置是否排除已登录用户"""
        self._skip_logged_in = value
