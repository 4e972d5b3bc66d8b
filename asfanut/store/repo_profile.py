"""store_profile テーブル（単一行）の CRUD。"""
from __future__ import annotations

import json
import sqlite3
from typing import Any, Optional

_PROFILE_ROW_ID = 1


def get_profile_data(conn: sqlite3.Connection) -> Optional[dict[str, Any]]:
    """プロフィール JSON を取得。未登録なら None。"""
    row = conn.execute(
        "SELECT data FROM store_profile WHERE id = ?", (_PROFILE_ROW_ID,)
    ).fetchone()
    return json.loads(row["data"]) if row else None


def save_profile_data(conn: sqlite3.Connection, profile: dict[str, Any]) -> None:
    """プロフィールを丸ごと置き換える。"""
    conn.execute(
        "INSERT OR REPLACE INTO store_profile (id, data) VALUES (?, ?)",
        (_PROFILE_ROW_ID, json.dumps(profile, ensure_ascii=False)),
    )
    conn.commit()
