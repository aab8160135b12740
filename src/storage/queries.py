"""
访问记录 SQL 语句

表名和列名在拼接前由 SqliteVisitStore 校验为合法标识符。
"""

# 访问记录表结构
CREATE_VISITS_TABLE = """
CREATE TABLE IF NOT EXISTS {table} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    created TEXT NOT NULL DEFAULT '',
    referrer TEXT NOT NULL DEFAULT '',
    target TEXT NOT NULL DEFAULT ''
)
"""

CREATE_CREATED_INDEX = """
CREATE INDEX IF NOT EXISTS {table}_created ON {table} (created)
"""

INSERT_ROW = "INSERT INTO {table} ({columns}) VALUES ({placeholders})"

COUNT_ROWS = "SELECT COUNT(*) FROM {table}"

SELECT_BY_ID = "SELECT * FROM {table} WHERE id = ?"
