"""items テーブルの CRUD。"""
from __future__ import annotations

import json
import sqlite3
from typing import Any, Optional


def list_items_data(conn: sqlite3.Connection) -> list[dict[str, Any]]:
    """全アイテムを作成日時の新しい順で取得。"""
    rows = conn.execute(
        "SELECT data FROM items ORDER BY created_at DESC"
    ).fetchall()
    return [json.loads(r["data"]) for r in rows]


def get_item_data(conn: sqlite3.Connection, item_id: str) -> Optional[dict[str, Any]]:
    """id でアイテムを取得。"""
    row = conn.execute("SELECT data FROM items WHERE id = ?", (item_id,)).fetchone()
    return json.loads(row["data"]) if row else None


def upsert_item_data(conn: sqlite3.Connection, item: dict[str, Any]) -> str:
    """アイテムを登録。同じ id があれば丸ごと置き換える。"""
    item_id = str(item["id"])
    conn.execute(
        "INSERT OR REPLACE INTO items (id, created_at, data) VALUES (?, ?, ?)",
        (item_id, int(item.get("createdAt") or 0), json.dumps(item, ensure_ascii=False)),
    )
    conn.commit()
    return item_id


def delete_item(conn: sqlite3.Connection, item_id: str) -> bool:
    """アイテムを削除。存在すれば True、しなければ False。"""
    cursor = conn.execute("DELETE FROM items WHERE id = ?", (item_id,))
    conn.commit()
    return cursor.rowcount > 0
