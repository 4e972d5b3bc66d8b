"""
ストアリポジトリの集約エントリポイント。
store_profile / items の CRUD を一元提供（REST サーバー用）。
"""
from __future__ import annotations

from asfanut.store.repo_items import delete_item, get_item_data, list_items_data, upsert_item_data
from asfanut.store.repo_profile import get_profile_data, save_profile_data

__all__ = [
    "get_profile_data",
    "save_profile_data",
    "list_items_data",
    "get_item_data",
    "upsert_item_data",
    "delete_item",
]
