"""
TrackerSettings / 日志工具单元测试
"""

import logging
from pathlib import Path

import pytest

from src.core import (
    DEFAULT_USER_AGENT_BLACKLIST,
    ConfigurationError,
    TrackerSettings,
    VisitTrackerError,
    parse_log_level,
)


class TestTrackerSettings:
    """运行配置测试"""

    def test_defaults_from_empty_env(self):
        """测试空环境使用默认值"""
        settings = TrackerSettings.from_env(env={})

        assert settings.db_path == Path("data") / "statify.db"
        assert settings.table_name == "statify"
        assert settings.user_agent_blacklist == DEFAULT_USER_AGENT_BLACKLIST
        assert settings.skip_logged_in is True
        assert settings.site_url is None
        assert settings.log_level == logging.INFO

    def test_values_from_env(self):
        """测试读取环境变量"""
        settings = TrackerSettings.from_env(env={
            "TRACKER_DB_PATH": "/tmp/visits.db",
            "TRACKER_TABLE": "visits",
            "TRACKER_UA_BLACKLIST": "curl, wget,,Scanner ",
            "TRACKER_SKIP_LOGGED_IN": "no",
            "TRACKER_SITE_URL": " https://example.com/ ",
            "TRACKER_LOG_LEVEL": "debug",
        })

        assert settings.db_path == Path("/tmp/visits.db")
        assert settings.table_name == "visits"
        assert settings.user_agent_blacklist == ["curl", "wget", "Scanner"]
        assert settings.skip_logged_in is False
        assert settings.site_url == "https://example.com/"
        assert settings.log_level == logging.DEBUG

    def test_default_blacklist_is_copied(self):
        """测试默认黑名单不共享同一个列表"""
        settings = TrackerSettings()
        settings.user_agent_blacklist.append("extra")

        assert "extra" not in DEFAULT_USER_AGENT_BLACKLIST

    def test_invalid_bool(self):
        """测试非法布尔值"""
        with pytest.raises(ConfigurationError) as exc_info:
            TrackerSettings.from_env(env={"TRACKER_SKIP_LOGGED_IN": "maybe"})

        assert exc_info.value.details["name"] == "TRACKER_SKIP_LOGGED_IN"

    def test_invalid_table_name(self):
        """测试非法表名"""
        with pytest.raises(ConfigurationError):
            TrackerSettings.from_env(env={"TRACKER_TABLE": "visits; drop"})

    def test_invalid_log_level(self):
        """测试非法日志级别"""
        with pytest.raises(ConfigurationError):
            TrackerSettings.from_env(env={"TRACKER_LOG_LEVEL": "LOUD"})

    @pytest.mark.parametrize("raw,expected", [
        ("10", logging.DEBUG),
        (" 40 ", logging.ERROR),
        ("info", logging.INFO),
        ("20", logging.INFO),
    ])
    def test_log_level_names_and_numbers(self, raw, expected):
        """测试日志级别可使用名称或数值"""
        settings = TrackerSettings.from_env(env={"TRACKER_LOG_LEVEL": raw})

        assert settings.log_level == expected

    @pytest.mark.parametrize("site_url", ["example.com", "/blog/", "https://"])
    def test_site_url_requires_scheme_and_host(self, site_url):
        """测试站点地址必须包含协议和主机名"""
        with pytest.raises(ConfigurationError) as exc_info:
            TrackerSettings.from_env(env={"TRACKER_SITE_URL": site_url})

        assert exc_info.value.details["site_url"] == site_url

    def test_site_url_validated_on_direct_construction(self):
        """测试直接构造配置时同样校验站点地址"""
        with pytest.raises(ConfigurationError):
            TrackerSettings(site_url="example.com")

        assert TrackerSettings(site_url="http://localhost:8080/").site_url == "http://localhost:8080/"

    def test_dotenv_file(self, tmp_path, monkeypatch):
        """测试从 .env 文件加载"""
        monkeypatch.setenv("TRACKER_TABLE", "placeholder")
        monkeypatch.delenv("TRACKER_TABLE")
        dotenv_path = tmp_path / ".env"
        dotenv_path.write_text("TRACKER_TABLE=from_dotenv\n", encoding="utf-8")

        settings = TrackerSettings.from_env(dotenv_path=dotenv_path)

        assert settings.table_name == "from_dotenv"


class TestLoggerHelpers:
    """日志工具测试"""

    @pytest.mark.parametrize("value,expected", [
        (None, logging.INFO),
        ("", logging.INFO),
        ("warning", logging.WARNING),
        (logging.ERROR, logging.ERROR),
        ("nonsense", logging.INFO),
        ("10", logging.DEBUG),
        (" 30 ", logging.WARNING),
    ])
    def test_parse_log_level(self, value, expected):
        """测试日志级别解析"""
        assert parse_log_level(value) == expected


class TestExceptions:
    """异常测试"""

    def test_details_in_str(self):
        """测试详情出现在字符串中"""
        error = ConfigurationError("bad", details={"name": "X"})

        assert isinstance(error, VisitTrackerError)
        assert str(error) == "bad | 详情: {'name': 'X'}"
        assert str(ConfigurationError("bad")) == "bad"
