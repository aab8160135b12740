"""
访问统计器

整合访问判定和存储，提供统一的请求处理接口。
判定结果与存储结果分开上报。
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Callable, Optional, Union

from src.core.config import DEFAULT_TABLE_NAME, TrackerSettings
from src.core.exceptions import StorageError, TrackingError
from src.core.logger import get_logger

from .filters import BlacklistEntry
from .hooks import SkipTrackingCallback, SkipTrackingHooks
from .models import RequestContext, TrackResult
from .visit_filter import VisitFilter

if TYPE_CHECKING:
    from src.core.interfaces.visit_store import IVisitStore

logger = get_logger(__name__)


class VisitTracker:
    """
    访问统计器

    处理流程:
        1. VisitFilter 判定请求是否排除
        2. 未排除时调用存储写入一行记录(每次处理最多一次)
        3. 返回 TrackResult，存储失败单独标记为 STORAGE_FAILED，
           钩子出错标记为 FAILED，均不向调用方抛出

    Attributes:
        visit_filter: 访问判定器
        store: 存储
        table_name: 访问记录表名
    """

    def __init__(
        self,
        store: IVisitStore,
        visit_filter: Optional[VisitFilter] = None,
        table_name: str = DEFAULT_TABLE_NAME,
    ) -> None:
        """
        初始化访问统计器

        Args:
            store: 存储
            visit_filter: 访问判定器，默认使用内置规则
            table_name: 访问记录表名
        """
        self._store = store
        self._visit_filter = visit_filter or VisitFilter()
        self._table_name = table_name

        # 统计信息
        self._stats = {
            "total_evaluated": 0,
            "tracked_count": 0,
            "excluded_count": 0,
            "storage_failed_count": 0,
            "failed_count": 0,
        }

    @classmethod
    def from_settings(
        cls,
        settings: TrackerSettings,
        store: IVisitStore,
        skip_tracking_hook: Union[SkipTrackingHooks, SkipTrackingCallback, None] = None,
        clock: Callable[[], date] = date.today,
    ) -> VisitTracker:
        """
        按配置创建访问统计器

        Args:
            settings: 运行配置
            store: 存储
            skip_tracking_hook: 跳过统计钩子
            clock: 返回当前日期的时钟

        Returns:
            VisitTracker 实例
        """
        visit_filter = VisitFilter(
            user_agent_blacklist=settings.user_agent_blacklist,
            skip_tracking_hook=skip_tracking_hook,
            clock=clock,
            skip_logged_in=settings.skip_logged_in,
            site_url=settings.site_url,
        )
        return cls(store=store, visit_filter=visit_filter, table_name=settings.table_name)

    @property
    def visit_filter(self) -> VisitFilter:
        """获取访问判定器"""
        return self._visit_filter

    @property
    def table_name(self) -> str:
        """访问记录表名"""
        return self._table_name

    @property
    def stats(self) -> dict:
        """获取统计信息"""
        return self._stats.copy()

    def track(
        self,
        context: RequestContext,
        user_agent_blacklist: Optional[list[BlacklistEntry]] = None,
    ) -> TrackResult:
        """
        处理单个请求

        Args:
            context: 请求上下文
            user_agent_blacklist: 本次判定使用的黑名单，None 时使用默认黑名单

        Returns:
            TrackResult: 统计结果
        """
        self._stats["total_evaluated"] += 1

        try:
            decision = self._visit_filter.decide(context, user_agent_blacklist)
        except TrackingError as e:
            self._stats["failed_count"] += 1
            return TrackResult.create_failed(error=str(e))

        if decision.should_skip:
            self._stats["excluded_count"] += 1
            logger.debug(
                f"请求被排除: target={context.target_path!r}, 原因: {decision.reason}"
            )
            return TrackResult.create_excluded(
                filter_name=decision.filter_name,
                reason=decision.reason,
            )

        record = self._visit_filter.build_record(context)
        try:
            record_id = self._store.insert(self._table_name, record.to_fields())
        except StorageError as e:
            self._stats["storage_failed_count"] += 1
            logger.error(f"访问记录写入失败: target={record.target!r}, 错误: {e}")
            return TrackResult.create_storage_failed(record=record, error=str(e))

        self._stats["tracked_count"] += 1
        logger.debug(f"访问已记录: id={record_id}, target={record.target!r}")
        return TrackResult.create_tracked(record=record, record_id=record_id)

    def track_batch(self, contexts: list[RequestContext]) -> list[TrackResult]:
        """
        批量处理请求

        Args:
            contexts: 请求上下文列表

        Returns:
            与输入顺序一致的统计结果列表
        """
        results = [self.track(context) for context in contexts]
        tracked = sum(1 for r in results if r.is_tracked)
        logger.info(f"批量处理完成: 共 {len(results)} 个请求, 记录 {tracked} 个")
        return results

    def reset_stats(self) -> None:
        """重置统计信息"""
        self._stats = {
            "total_evaluated": 0,
            "tracked_count": 0,
            "excluded_count": 0,
            "storage_failed_count": 0,
            "failed_count": 0,
        }
