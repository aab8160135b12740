"""
页面访问统计模块

判定 HTTP 请求是否为需要记录的页面访问，通过时生成 (日期, 路径, 来源) 记录并写入存储。

公开接口:
    - VisitFilter: 访问判定器
    - VisitTracker: 判定 + 写入
    - SkipTrackingHooks: 跳过统计钩子链
    - RequestContext / RequestFlags: 判定输入
    - VisitRecord / TrackResult: 判定输出

使用示例:
    >>> from src.tracking import VisitTracker, RequestContext
    >>> from src.storage import SqliteVisitStore
    >>>
    >>> with SqliteVisitStore(db_path) as store:
    ...     store.ensure_table("statify")
    ...     tracker = VisitTracker(store)
    ...     result = tracker.track(RequestContext.from_environ(environ))
    ...     if result.is_tracked:
    ...         pass
"""

from .filters import (
    BaseFilter,
    FilterResult,
    RequestFlagFilter,
    TargetFilter,
    UserAgentFilter,
    match_user_agent,
)
from .hooks import SkipTrackingHooks
from .models import (
    RequestContext,
    RequestFlags,
    TrackResult,
    TrackStatus,
    VisitRecord,
)
from .tracker import VisitTracker
from .visit_filter import VisitFilter, is_internal_referrer

__all__ = [
    # 主组件
    "VisitFilter",
    "VisitTracker",
    "SkipTrackingHooks",
    # 数据模型
    "RequestContext",
    "RequestFlags",
    "VisitRecord",
    "TrackResult",
    "TrackStatus",
    # 排除规则
    "BaseFilter",
    "FilterResult",
    "TargetFilter",
    "UserAgentFilter",
    "RequestFlagFilter",
    "match_user_agent",
    "is_internal_referrer",
]
