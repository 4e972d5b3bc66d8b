"""
永続化バックエンド。
LocalBackend: 端末内 SQLite（settings / local_items の2パーティション）。
RemoteBackend: REST サーバー（/profile, /items）に requests でアクセス。
どちらも同じエンティティ形状を返す。
"""
from __future__ import annotations

import abc
import json
import logging
import sqlite3
from typing import Any, Optional
from urllib.parse import quote

import requests

from asfanut.store import db
from asfanut.store.models import CollectibleItem, StoreProfile
from asfanut.util import http

logger = logging.getLogger(__name__)

PROFILE_KEY = "profile"


class StorageError(Exception):
    """バックエンドの読み書き失敗（通信エラー・DB エラー・不正な応答）。"""


class StorageBackend(abc.ABC):
    """プロフィールとアイテムの CRUD。キャッシュは持たず、毎回ソースを読み直す。"""

    name = "abstract"

    @abc.abstractmethod
    def get_profile(self) -> Optional[StoreProfile]: ...

    @abc.abstractmethod
    def save_profile(self, profile: StoreProfile) -> None: ...

    @abc.abstractmethod
    def get_items(self) -> list[CollectibleItem]: ...

    @abc.abstractmethod
    def save_item(self, item: CollectibleItem) -> None: ...

    @abc.abstractmethod
    def delete_item(self, item_id: str) -> None: ...


class LocalBackend(StorageBackend):
    """同一プロセス内の SQLite ファイル。"""

    name = "local"

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        try:
            conn = db.get_connection(self.db_path)
        except sqlite3.Error as e:
            raise StorageError(f"ローカルDBを開けません: {e}") from e
        try:
            db.init_local_schema(conn)
        except sqlite3.Error as e:
            conn.close()
            raise StorageError(f"ローカルDBを開けません: {e}") from e
        return conn

    def get_profile(self) -> Optional[StoreProfile]:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT value FROM settings WHERE key = ?", (PROFILE_KEY,)
            ).fetchone()
            return StoreProfile.from_dict(json.loads(row["value"])) if row else None
        except (sqlite3.Error, ValueError) as e:
            raise StorageError(f"プロフィールの読み込みに失敗: {e}") from e
        finally:
            conn.close()

    def save_profile(self, profile: StoreProfile) -> None:
        conn = self._connect()
        try:
            conn.execute(
                "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
                (PROFILE_KEY, json.dumps(profile.to_dict(), ensure_ascii=False)),
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(f"プロフィールの保存に失敗: {e}") from e
        finally:
            conn.close()

    def get_items(self) -> list[CollectibleItem]:
        conn = self._connect()
        try:
            rows = conn.execute("SELECT data FROM local_items").fetchall()
            items = [CollectibleItem.from_dict(json.loads(r["data"])) for r in rows]
        except (sqlite3.Error, ValueError, KeyError) as e:
            raise StorageError(f"アイテムの読み込みに失敗: {e}") from e
        finally:
            conn.close()
        # 並び順は createdAt の降順（新しいものが先頭）
        return sorted(items, key=lambda i: i.created_at, reverse=True)

    def save_item(self, item: CollectibleItem) -> None:
        conn = self._connect()
        try:
            conn.execute(
                "INSERT OR REPLACE INTO local_items (id, data) VALUES (?, ?)",
                (item.id, json.dumps(item.to_dict(), ensure_ascii=False)),
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(f"アイテムの保存に失敗: {e}") from e
        finally:
            conn.close()

    def delete_item(self, item_id: str) -> None:
        conn = self._connect()
        try:
            conn.execute("DELETE FROM local_items WHERE id = ?", (item_id,))
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(f"アイテムの削除に失敗: {e}") from e
        finally:
            conn.close()


class RemoteBackend(StorageBackend):
    """REST サーバー経由。並び順はサーバー側（created_at DESC）に任せる。"""

    name = "remote"

    def __init__(
        self,
        base_url: str,
        session: Optional[Any] = None,
        timeout_sec: Optional[int] = None,
    ) -> None:
        if not base_url:
            raise ValueError("api_base_url must be set for remote storage")
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.timeout_sec = timeout_sec

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _call(self, method: str, path: str, body: Any = None) -> Any:
        url = self._url(path)
        try:
            if method == "GET":
                return http.get_json(url, timeout_sec=self.timeout_sec, session=self.session)
            if method == "POST":
                return http.post_json(url, body, timeout_sec=self.timeout_sec, session=self.session)
            return http.delete(url, timeout_sec=self.timeout_sec, session=self.session)
        except (requests.RequestException, OSError, ValueError) as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise StorageError(f"サーバーとの通信に失敗: {e}") from e

    def get_profile(self) -> Optional[StoreProfile]:
        data = self._call("GET", "/profile")
        if data is not None and not isinstance(data, dict):
            raise StorageError("プロフィールの応答形式が不正です")
        return StoreProfile.from_dict(data)

    def save_profile(self, profile: StoreProfile) -> None:
        self._call("POST", "/profile", profile.to_dict())

    def get_items(self) -> list[CollectibleItem]:
        data = self._call("GET", "/items")
        if data is None:
            return []
        if not isinstance(data, list):
            raise StorageError("アイテム一覧の応答形式が不正です")
        try:
            return [CollectibleItem.from_dict(d) for d in data]
        except (KeyError, ValueError, TypeError) as e:
            raise StorageError(f"アイテムの応答を解釈できません: {e}") from e

    def save_item(self, item: CollectibleItem) -> None:
        self._call("POST", "/items", item.to_dict())

    def delete_item(self, item_id: str) -> None:
        self._call("DELETE", f"/items/{quote(item_id, safe='')}")
