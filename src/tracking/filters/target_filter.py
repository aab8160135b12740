"""
请求路径过滤器

没有请求路径的请求不计入统计。
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base_filter import BaseFilter, FilterResult

if TYPE_CHECKING:
    from ..models import RequestContext


class TargetFilter(BaseFilter):
    """请求路径为空时排除"""

    def __init__(self, enabled: bool = True) -> None:
        super().__init__(name="target", enabled=enabled)

    def _do_check(self, context: RequestContext) -> FilterResult:
        if not context.has_target:
            return FilterResult.skipped(
                filter_name=self.name,
                reason="请求路径为空",
            )
        return FilterResult.passed(self.name)
