"""日時・ID ユーティリティ。"""
from __future__ import annotations

import time
import uuid
from datetime import datetime
from zoneinfo import ZoneInfo


def now_millis() -> int:
    """現在時刻（エポックミリ秒）。createdAt に使う。"""
    return int(time.time() * 1000)


def new_item_id() -> str:
    """アイテムの不透明な一意 ID。"""
    return uuid.uuid4().hex


def format_created_at(millis: int, tz: str = "Asia/Jerusalem") -> str:
    """createdAt を表示用にフォーマット。例: 2026-02-05 15:00"""
    return datetime.fromtimestamp(millis / 1000, ZoneInfo(tz)).strftime("%Y-%m-%d %H:%M")
