"""
永続化ファサード。起動時に設定から一度だけバックエンドを選び、以後は呼び出し側で分岐しない。
"""
from __future__ import annotations

import logging
from typing import Optional

from asfanut.settings import STORAGE_REMOTE, AppSettings
from asfanut.store.backends import LocalBackend, RemoteBackend, StorageBackend
from asfanut.store.models import CollectibleItem, StoreProfile
from asfanut.util.log import log_item_event

logger = logging.getLogger(__name__)


class Storage:
    """get_profile / save_profile / get_items / save_item / delete_item の5操作。"""

    def __init__(self, backend: StorageBackend) -> None:
        self.backend = backend

    @property
    def backend_name(self) -> str:
        return self.backend.name

    def get_profile(self) -> Optional[StoreProfile]:
        return self.backend.get_profile()

    def save_profile(self, profile: StoreProfile) -> None:
        self.backend.save_profile(profile)
        logger.info("profile saved store_name=%s backend=%s", profile.store_name, self.backend_name)

    def get_items(self) -> list[CollectibleItem]:
        """作成日時の新しい順。"""
        return self.backend.get_items()

    def save_item(self, item: CollectibleItem) -> None:
        """id が未登録なら追加、登録済みなら丸ごと置き換え（部分更新はしない）。"""
        self.backend.save_item(item)
        log_item_event(logger, "save", item.id, status=item.status.value, price=item.user_price)

    def delete_item(self, item_id: str) -> None:
        """存在しない id でもエラーにしない。"""
        self.backend.delete_item(item_id)
        log_item_event(logger, "delete", item_id)


def create_backend(settings: AppSettings) -> StorageBackend:
    if settings.storage_type == STORAGE_REMOTE:
        return RemoteBackend(settings.api_base_url)
    return LocalBackend(settings.local_db_path)


def create_storage(settings: AppSettings) -> Storage:
    backend = create_backend(settings)
    logger.info("storage backend=%s", backend.name)
    return Storage(backend)
