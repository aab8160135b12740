"""
请求上下文和结果模型单元测试
"""

from datetime import date

import pytest
from pydantic import ValidationError

from src.tracking.models import (
    RequestContext,
    RequestFlags,
    TrackResult,
    TrackStatus,
    VisitRecord,
)

from tests.samples import REFERRER, TARGET_1, UA_VALID


class TestRequestContext:
    """请求上下文测试"""

    def test_defaults(self):
        """测试缺省字段视为空"""
        context = RequestContext()

        assert context.target_path == ""
        assert context.referrer is None
        assert context.user_agent is None
        assert context.has_target is False
        assert context.flags == RequestFlags()

    def test_none_and_blank_are_normalized(self):
        """测试 None 路径和空字符串头部的规范化"""
        context = RequestContext(target_path=None, referrer="", user_agent="")

        assert context.target_path == ""
        assert context.referrer is None
        assert context.user_agent is None

    def test_context_is_immutable(self):
        """测试上下文不可修改"""
        context = RequestContext(target_path=TARGET_1)

        with pytest.raises(ValidationError):
            context.target_path = "/other/"

    def test_from_environ_uses_request_uri(self):
        """测试从 WSGI 环境读取请求信息"""
        environ = {
            "REQUEST_URI": TARGET_1,
            "PATH_INFO": "/ignored/",
            "HTTP_REFERER": REFERRER,
            "HTTP_USER_AGENT": UA_VALID,
        }

        context = RequestContext.from_environ(environ, RequestFlags(is_search=True))

        assert context.target_path == TARGET_1
        assert context.referrer == REFERRER
        assert context.user_agent == UA_VALID
        assert context.flags.is_search is True

    def test_from_environ_falls_back_to_path_info(self):
        """测试没有 REQUEST_URI 时使用 PATH_INFO 和 QUERY_STRING"""
        context = RequestContext.from_environ({
            "PATH_INFO": "/search/",
            "QUERY_STRING": "s=term",
        })

        assert context.target_path == "/search/?s=term"
        assert context.referrer is None
        assert context.user_agent is None

    def test_from_empty_environ(self):
        """测试空环境不抛出异常"""
        context = RequestContext.from_environ({})

        assert context.has_target is False


class TestRequestFlags:
    """请求标志测试"""

    def test_defaults_are_false(self):
        """测试默认全部为假"""
        flags = RequestFlags()

        assert not any(value for _, value in flags)

    def test_flags_are_frozen(self):
        """测试标志不可修改"""
        flags = RequestFlags(is_404=True)

        with pytest.raises(ValidationError):
            flags.is_404 = False


class TestTrackResult:
    """统计结果测试"""

    def test_tracked_to_dict(self):
        """测试已记录结果的字典格式"""
        record = VisitRecord(created=date(2024, 6, 15), target=TARGET_1)

        data = TrackResult.create_tracked(record=record, record_id=7).to_dict()

        assert data["status"] == "tracked"
        assert data["record_id"] == 7
        assert data["record"] == {"created": "2024-06-15", "referrer": "", "target": TARGET_1}
        assert data["should_track"] is True

    def test_excluded_default_reason(self):
        """测试排除结果的默认原因"""
        result = TrackResult.create_excluded(filter_name="user_agent")

        assert result.status == TrackStatus.EXCLUDED
        assert "user_agent" in result.reason
        assert result.should_track is False

    def test_failed_result(self):
        """测试判定失败结果不含记录且不应记录"""
        result = TrackResult.create_failed(error="boom")

        assert result.status == TrackStatus.FAILED
        assert result.record is None
        assert result.should_track is False
        assert result.to_dict()["error"] == "boom"
