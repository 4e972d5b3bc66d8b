"""SQLite テーブル作成と接続。"""
import os
import sqlite3
from pathlib import Path
from typing import Optional

# デフォルトはプロジェクトルートの data/database.sqlite（REST サーバー用）
def _default_db_path() -> str:
    base = Path(__file__).resolve().parent.parent.parent
    data_dir = base / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    return str(data_dir / "database.sqlite")

def get_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    path = db_path or os.getenv("SERVER_DB_PATH") or _default_db_path()
    if path != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    return conn

def init_schema(conn: sqlite3.Connection) -> None:
    """REST サーバー側のテーブル。各行はエンティティ JSON をそのまま持つ。"""
    conn.executescript("""
        CREATE TABLE IF NOT EXISTS store_profile (
            id INTEGER PRIMARY KEY CHECK (id = 1),
            data TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS items (
            id TEXT PRIMARY KEY,
            created_at INTEGER,
            data TEXT NOT NULL
        );

        CREATE INDEX IF NOT EXISTS idx_items_created_at ON items(created_at);
    """)
    conn.commit()

def init_local_schema(conn: sqlite3.Connection) -> None:
    """端末内ストア。settings は固定キー、local_items はアイテム ID をキーにする。"""
    conn.executescript("""
        CREATE TABLE IF NOT EXISTS settings (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS local_items (
            id TEXT PRIMARY KEY,
            data TEXT NOT NULL
        );
    """)
    conn.commit()
