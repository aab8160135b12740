"""
RequestFlagFilter / TargetFilter 单元测试
"""

import pytest

from src.tracking.filters import EXCLUDING_FLAGS, RequestFlagFilter, TargetFilter


class TestRequestFlagFilter:
    """请求标志过滤器测试"""

    @pytest.mark.parametrize("flag", EXCLUDING_FLAGS)
    def test_each_flag_excludes(self, make_context, flag):
        """测试任一标志为真时排除"""
        filter_ = RequestFlagFilter()

        result = filter_.check(make_context(**{flag: True}))

        assert result.should_skip is True
        assert result.matched_rule == flag
        assert filter_.stats[flag] == 1

    def test_no_flags_passes(self, sample_context):
        """测试无标志时通过"""
        result = RequestFlagFilter().check(sample_context)

        assert result.should_skip is False

    def test_first_flag_in_order_is_reported(self, make_context):
        """测试多个标志同时为真时报告顺序最前的标志"""
        filter_ = RequestFlagFilter()

        result = filter_.check(make_context(is_search=True, is_feed=True))

        assert result.matched_rule == "is_feed"
        assert filter_.stats["is_search"] == 0

    def test_logged_in_tracked_when_disabled(self, make_context):
        """测试关闭 skip_logged_in 后已登录用户照常统计"""
        filter_ = RequestFlagFilter(skip_logged_in=False)

        assert filter_.check(make_context(is_user_logged_in=True)).should_skip is False
        assert filter_.check(make_context(is_user_logged_in=True, is_404=True)).should_skip is True

        filter_.skip_logged_in = True
        assert filter_.check(make_context(is_user_logged_in=True)).should_skip is True

    def test_filter_name(self):
        """测试过滤器名称"""
        assert RequestFlagFilter().name == "request_flags"


class TestTargetFilter:
    """请求路径过滤器测试"""

    @pytest.mark.parametrize("target", [None, ""])
    def test_empty_target_is_skipped(self, make_context, target):
        """测试空路径排除"""
        filter_ = TargetFilter()

        result = filter_.check(make_context(target_path=target))

        assert result.should_skip is True
        assert filter_.stats == {"total_checked": 1, "total_skipped": 1}

    def test_target_passes(self, sample_context):
        """测试有路径时通过"""
        assert TargetFilter().check(sample_context).should_skip is False

    def test_reset_stats(self, make_context):
        """测试重置统计"""
        filter_ = TargetFilter()
        filter_.check(make_context(target_path=""))

        filter_.reset_stats()

        assert filter_.stats == {"total_checked": 0, "total_skipped": 0}
