"""
访问统计数据模型

定义 tracking 模块使用的所有数据模型。
"""

from .request_context import RequestContext, RequestFlags
from .track_result import TrackResult, TrackStatus
from .visit_record import VisitRecord

__all__ = [
    "RequestContext",
    "RequestFlags",
    "VisitRecord",
    "TrackResult",
    "TrackStatus",
]
