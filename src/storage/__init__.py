"""
访问记录存储模块

提供 IVisitStore 的具体实现。

Example:
    from src.storage import SqliteVisitStore

    with SqliteVisitStore(db_path) as store:
        store.ensure_table("statify")
        row_id = store.insert("statify", record.to_fields())
"""

from .sqlite_store import SqliteVisitStore

__all__ = [
    "SqliteVisitStore",
]
