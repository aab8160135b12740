"""
SQLite 访问记录存储

IVisitStore 的 SQLite 实现，每次调用写入一行访问记录。
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

from src.core.logger import get_logger
from src.core.exceptions import (
    StorageConnectionError,
    StorageWriteError,
)
from src.core.interfaces.visit_store import IVisitStore

from .queries import (
    COUNT_ROWS,
    CREATE_CREATED_INDEX,
    CREATE_VISITS_TABLE,
    INSERT_ROW,
    SELECT_BY_ID,
)

logger = get_logger(__name__)

MEMORY_DB = ":memory:"


def _check_identifier(name: str, kind: str) -> str:
    """校验表名/列名，防止拼接进 SQL 的标识符被注入"""
    if not isinstance(name, str) or not name.isidentifier():
        raise StorageWriteError(
            f"无效的{kind}: {name!r}",
            details={kind: name},
        )
    return name


class SqliteVisitStore(IVisitStore):
    """
    SQLite 访问记录存储

    Attributes:
        db_path: 数据库文件路径，":memory:" 表示内存数据库
        _connection: SQLite连接对象

    Example:
        with SqliteVisitStore(Path("data/statify.db")) as store:
            store.ensure_table("statify")
            row_id = store.insert("statify", record.to_fields())
    """

    def __init__(self, db_path: Path | str = MEMORY_DB) -> None:
        """
        初始化存储

        Args:
            db_path: 数据库文件路径
        """
        self.db_path = db_path if db_path == MEMORY_DB else Path(db_path)
        self._connection: Optional[sqlite3.Connection] = None

    def connect(self) -> None:
        """
        建立数据库连接，文件所在目录不存在时自动创建

        Raises:
            StorageConnectionError: 连接失败时抛出
        """
        if self._connection is not None:
            logger.debug("数据库已连接，跳过重复连接")
            return

        try:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(str(self.db_path))
            self._connection.row_factory = sqlite3.Row
            logger.info(f"成功连接到数据库: {self.db_path}")
        except (OSError, sqlite3.Error) as e:
            raise StorageConnectionError(
                f"无法连接到数据库: {e}",
                details={"path": str(self.db_path), "error": str(e)}
            ) from e

    def disconnect(self) -> None:
        """断开数据库连接"""
        if self._connection:
            self._connection.close()
            self._connection = None
            logger.info("数据库连接已关闭")

    def is_connected(self) -> bool:
        """检查是否已连接"""
        return self._connection is not None

    def _ensure_connected(self) -> sqlite3.Connection:
        """确保数据库已连接"""
        if self._connection is None:
            raise StorageConnectionError(
                "数据库未连接，请先调用 connect() 方法"
            )
        return self._connection

    def ensure_table(self, table_name: str) -> None:
        """
        创建访问记录表(已存在时不做任何修改)

        Args:
            table_name: 表名

        Raises:
            StorageWriteError: 建表失败时抛出
        """
        table = _check_identifier(table_name, "表名")
        connection = self._ensure_connected()
        try:
            with connection:
                connection.execute(CREATE_VISITS_TABLE.format(table=table))
                connection.execute(CREATE_CREATED_INDEX.format(table=table))
        except sqlite3.Error as e:
            raise StorageWriteError(
                f"建表失败: {e}",
                details={"table": table, "error": str(e)}
            ) from e

    def insert(self, table_name: str, fields: dict[str, str]) -> int:
        """
        写入一行访问记录

        Args:
            table_name: 目标表名
            fields: 字段名到字段值的映射

        Returns:
            新记录的主键 ID

        Raises:
            StorageConnectionError: 未连接时抛出
            StorageWriteError: 写入失败时抛出
        """
        table = _check_identifier(table_name, "表名")
        if not fields:
            raise StorageWriteError("写入字段为空", details={"table": table})
        columns = [_check_identifier(column, "列名") for column in fields]

        sql = INSERT_ROW.format(
            table=table,
            columns=", ".join(columns),
            placeholders=", ".join("?" for _ in columns),
        )
        connection = self._ensure_connected()
        try:
            with connection:
                cursor = connection.execute(sql, tuple(fields.values()))
        except sqlite3.Error as e:
            raise StorageWriteError(
                f"写入失败: {e}",
                details={"table": table, "error": str(e)}
            ) from e

        logger.debug(f"写入访问记录: table={table}, id={cursor.lastrowid}")
        return cursor.lastrowid

    def count(self, table_name: str) -> int:
        """统计表中的记录数"""
        table = _check_identifier(table_name, "表名")
        connection = self._ensure_connected()
        try:
            row = connection.execute(COUNT_ROWS.format(table=table)).fetchone()
        except sqlite3.Error as e:
            raise StorageWriteError(
                f"查询执行失败: {e}",
                details={"table": table, "error": str(e)}
            ) from e
        return row[0]

    def get(self, table_name: str, row_id: int) -> Optional[dict]:
        """
        按主键读取一行记录

        Returns:
            字段字典，不存在时返回 None
        """
        table = _check_identifier(table_name, "表名")
        connection = self._ensure_connected()
        try:
            row = connection.execute(
                SELECT_BY_ID.format(table=table), (row_id,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StorageWriteError(
                f"查询执行失败: {e}",
                details={"table": table, "error": str(e)}
            ) from e
        return dict(row) if row else None

    def __enter__(self) -> SqliteVisitStore:
        """上下文管理器入口"""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """上下文管理器出口"""
        self.disconnect()
