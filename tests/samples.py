"""
测试常量和替身存储
"""

from src.core.exceptions import StorageWriteError
from src.core.interfaces.visit_store import IVisitStore

TARGET_1 = "/some/page/"
TARGET_2 = "/another/page/"
REFERRER = "https://example.org"
UA_BLOCKED = "curl/7.58.0"
UA_VALID = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/66.0.3359.170 Safari/537.36 OPR/53.0.2907.68"
)


class RecordingStore(IVisitStore):
    """记录每次写入的内存存储"""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.inserts: list[tuple[str, dict[str, str]]] = []

    def insert(self, table_name: str, fields: dict[str, str]) -> int:
        self.inserts.append((table_name, dict(fields)))
        if self.fail:
            raise StorageWriteError("disk full", details={"table": table_name})
        return len(self.inserts)
