"""
单次访问统计脚本

对一次请求执行访问判定，通过时写入 SQLite 数据库，并以 JSON 输出结果。
配置从项目根目录的 .env 读取(见 src/core/config.py)。

用法:
    python track_visit.py 路径 [--referrer 来源] [--user-agent UA] [--flag 标志 ...]

示例:
    python track_visit.py /some/page/ --user-agent "Mozilla/5.0 (X11; Linux x86_64)"
    python track_visit.py /feed/ --user-agent "Mozilla/5.0" --flag is_feed
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

# 添加项目根目录到路径
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from dotenv import load_dotenv
load_dotenv(PROJECT_ROOT / ".env")

from src.core import ConfigurationError, StorageError, TrackerSettings, setup_logging, get_logger
from src.storage import SqliteVisitStore
from src.tracking import RequestContext, RequestFlags, TrackStatus, VisitTracker
from src.tracking.filters import EXCLUDING_FLAGS

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """解析命令行参数"""
    parser = argparse.ArgumentParser(
        description="访问统计脚本 - 判定并记录一次页面访问"
    )
    parser.add_argument(
        "target",
        type=str,
        help="请求路径，例如 /some/page/"
    )
    parser.add_argument(
        "--referrer", "-r",
        type=str,
        default=None,
        help="Referer 头"
    )
    parser.add_argument(
        "--user-agent", "-u",
        type=str,
        default=None,
        help="User-Agent 头"
    )
    parser.add_argument(
        "--flag", "-f",
        action="append",
        choices=EXCLUDING_FLAGS,
        default=[],
        help="为真的请求标志，可重复指定"
    )
    parser.add_argument(
        "--db",
        type=str,
        default=None,
        help="SQLite 数据库路径 (默认读取 TRACKER_DB_PATH)"
    )
    parser.add_argument(
        "--table",
        type=str,
        default=None,
        help="访问记录表名 (默认读取 TRACKER_TABLE)"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="只输出警告和错误日志"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """主函数"""
    args = parse_args(argv)

    try:
        settings = TrackerSettings.from_env()
        overrides = {}
        if args.db:
            overrides["db_path"] = Path(args.db)
        if args.table:
            overrides["table_name"] = args.table
        if overrides:
            settings = replace(settings, **overrides)
    except ConfigurationError as e:
        print(f"错误: 配置无效: {e}")
        return 2

    setup_logging(level=logging.WARNING if args.quiet else settings.log_level)

    context = RequestContext(
        target_path=args.target,
        referrer=args.referrer,
        user_agent=args.user_agent,
        flags=RequestFlags(**{flag: True for flag in args.flag}),
    )

    try:
        with SqliteVisitStore(settings.db_path) as store:
            store.ensure_table(settings.table_name)
            tracker = VisitTracker.from_settings(settings, store)
            result = tracker.track(context)
    except StorageError as e:
        logger.error(f"数据库不可用: {e}")
        return 1

    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    return 1 if result.status in (TrackStatus.STORAGE_FAILED, TrackStatus.FAILED) else 0


if __name__ == "__main__":
    sys.exit(main())
