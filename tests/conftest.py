"""
共享测试 fixture 和配置
"""

from datetime import date
from typing import Optional

import pytest

from src.tracking.models import RequestContext, RequestFlags

from tests.samples import TARGET_1, UA_VALID, RecordingStore


@pytest.fixture
def today() -> date:
    """固定的当前日期"""
    return date(2024, 6, 15)


@pytest.fixture
def clock(today: date):
    """返回固定日期的时钟"""
    return lambda: today


@pytest.fixture
def make_context():
    """创建 RequestContext 的工厂函数"""

    def _make(
        target_path: Optional[str] = TARGET_1,
        referrer: Optional[str] = None,
        user_agent: Optional[str] = UA_VALID,
        **flags: bool,
    ) -> RequestContext:
        return RequestContext(
            target_path=target_path,
            referrer=referrer,
            user_agent=user_agent,
            flags=RequestFlags(**flags),
        )

    return _make


@pytest.fixture
def sample_context(make_context) -> RequestContext:
    """标准测试请求"""
    return make_context()


@pytest.fixture
def recording_store() -> RecordingStore:
    """记录写入的存储"""
    return RecordingStore()


@pytest.fixture
def failing_store() -> RecordingStore:
    """每次写入都失败的存储"""
    return RecordingStore(fail=True)
