"""テスト共通のフィクスチャ。"""
import pytest

from asfanut.store.backends import LocalBackend
from asfanut.store.facade import Storage


@pytest.fixture
def local_backend(tmp_path):
    return LocalBackend(str(tmp_path / "local.db"))


@pytest.fixture
def storage(local_backend):
    return Storage(local_backend)
