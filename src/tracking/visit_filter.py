"""
访问判定

对单个请求依次执行内置排除规则和跳过统计钩子，
通过判定时生成规范化的访问记录。
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Optional, Union
from urllib.parse import SplitResult, urlsplit

from src.core.logger import get_logger

from .filters import (
    BlacklistEntry,
    FilterResult,
    RequestFlagFilter,
    TargetFilter,
    UserAgentFilter,
)
from .hooks import SkipTrackingCallback, SkipTrackingHooks, as_hooks
from .models import RequestContext, VisitRecord

logger = get_logger(__name__)

# 钩子改变排除决定时使用的规则名称
HOOK_FILTER_NAME = "skip_tracking_hook"


# 各协议的默认端口，显式写出默认端口与省略端口视为同一地址
_DEFAULT_PORTS = {"http": 80, "https": 443}


def _host_and_port(url: SplitResult) -> tuple[str, Optional[int]]:
    """返回小写主机名和非默认端口(默认端口记为 None)"""
    port = url.port
    if port == _DEFAULT_PORTS.get(url.scheme.lower()):
        port = None
    return (url.hostname or "", port)


def is_internal_referrer(referrer: str, site_url: str) -> bool:
    """
    判断来源是否为站内地址

    Args:
        referrer: 原始来源地址
        site_url: 站点首页地址

    Returns:
        来源与站点协议无关地同主机、同端口，且路径位于站点路径之下时返回 True
    """
    ref = urlsplit(referrer.strip())
    site = urlsplit(site_url.strip())
    if not ref.hostname or not site.hostname:
        return False
    try:
        if _host_and_port(ref) != _host_and_port(site):
            return False
    except ValueError:
        # 端口不是合法数字
        return False
    site_path = site.path.rstrip("/")
    return ref.path == site_path or ref.path.startswith(site_path + "/")


class VisitFilter:
    """
    访问判定器

    判定顺序:
        1. 请求路径为空 - 直接排除，不执行钩子
        2. User-Agent 为空或命中黑名单 - 暂定排除
        3. 任一请求标志为真 - 暂定排除
        4. 跳过统计钩子 - 收到暂定决定，返回最终决定(每次判定恰好执行一次)

    2、3 中第一个命中的规则生效，后续规则不再检查。

    Attributes:
        target_filter: 请求路径规则
        user_agent_filter: User-Agent 规则
        flag_filter: 请求标志规则
        hooks: 跳过统计钩子链
    """

    def __init__(
        self,
        user_agent_blacklist: Optional[list[BlacklistEntry]] = None,
        skip_tracking_hook: Union[SkipTrackingHooks, SkipTrackingCallback, None] = None,
        clock: Callable[[], date] = date.today,
        skip_logged_in: bool = True,
        site_url: Optional[str] = None,
    ) -> None:
        """
        初始化访问判定器

        Args:
            user_agent_blacklist: 默认 User-Agent 黑名单，None 时使用内置列表
            skip_tracking_hook: 跳过统计钩子(链或单个回调)
            clock: 返回当前日期的时钟
            skip_logged_in: 是否排除已登录用户
            site_url: 站点首页地址，配置后站内来源记为空
        """
        self._target_filter = TargetFilter()
        self._user_agent_filter = UserAgentFilter(blacklist=user_agent_blacklist)
        self._flag_filter = RequestFlagFilter(skip_logged_in=skip_logged_in)
        self._hooks = as_hooks(skip_tracking_hook)
        self._clock = clock
        self._site_url = site_url

    @property
    def target_filter(self) -> TargetFilter:
        """请求路径规则"""
        return self._target_filter

    @property
    def user_agent_filter(self) -> UserAgentFilter:
        """User-Agent 规则"""
        return self._user_agent_filter

    @property
    def flag_filter(self) -> RequestFlagFilter:
        """请求标志规则"""
        return self._flag_filter

    @property
    def hooks(self) -> SkipTrackingHooks:
        """跳过统计钩子链"""
        return self._hooks

    def decide(
        self,
        context: RequestContext,
        user_agent_blacklist: Optional[list[BlacklistEntry]] = None,
    ) -> FilterResult:
        """
        判定请求是否应被排除

        Args:
            context: 请求上下文
            user_agent_blacklist: 本次判定使用的黑名单，None 时使用默认黑名单

        Returns:
            FilterResult: should_skip 为最终排除决定

        Raises:
            TrackingError: 跳过统计钩子执行失败时抛出
        """
        result = self._target_filter.check(context)
        if result.should_skip:
            return result

        result = self._apply_builtin_rules(context, user_agent_blacklist)
        final_skip = self._hooks.apply(result.should_skip)

        if final_skip == result.should_skip:
            return result
        if final_skip:
            return FilterResult.skipped(
                filter_name=HOOK_FILTER_NAME,
                reason="跳过统计钩子要求排除",
            )
        return FilterResult(
            should_skip=False,
            filter_name=HOOK_FILTER_NAME,
            reason=f"跳过统计钩子覆盖了规则 {result.filter_name}",
            matched_rule=result.matched_rule,
        )

    def _apply_builtin_rules(
        self,
        context: RequestContext,
        user_agent_blacklist: Optional[list[BlacklistEntry]],
    ) -> FilterResult:
        """按顺序执行 User-Agent 和请求标志规则"""
        if user_agent_blacklist is None:
            result = self._user_agent_filter.check(context)
        else:
            result = self._user_agent_filter.check_with_blacklist(
                context, user_agent_blacklist
            )
        if result.should_skip:
            return result

        return self._flag_filter.check(context)

    def evaluate(
        self,
        context: RequestContext,
        user_agent_blacklist: Optional[list[BlacklistEntry]] = None,
    ) -> Optional[VisitRecord]:
        """
        判定请求并在通过时生成访问记录

        Args:
            context: 请求上下文
            user_agent_blacklist: 本次判定使用的黑名单，None 时使用默认黑名单

        Returns:
            通过判定时返回 VisitRecord，否则返回 None

        Raises:
            TrackingError: 跳过统计钩子执行失败时抛出
        """
        result = self.decide(context, user_agent_blacklist)
        if result.should_skip:
            logger.debug(
                f"请求被排除: target={context.target_path!r}, "
                f"rule={result.filter_name}, 原因: {result.reason}"
            )
            return None
        return self.build_record(context)

    def build_record(self, context: RequestContext) -> VisitRecord:
        """由请求上下文生成访问记录"""
        referrer = context.referrer or ""
        if referrer and self._site_url and is_internal_referrer(referrer, self._site_url):
            referrer = ""
        today = self._clock()
        if isinstance(today, datetime):
            today = today.date()
        return VisitRecord(
            created=today,
            target=context.target_path,
            referrer=referrer,
        )
