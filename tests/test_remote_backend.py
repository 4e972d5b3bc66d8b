"""RemoteBackend のテスト。REST サーバーを TestClient 経由で叩く。"""
import pytest
import requests
from fastapi.testclient import TestClient

from asfanut.server import create_app
from asfanut.store.backends import RemoteBackend, StorageError
from asfanut.store.facade import Storage
from asfanut.store.models import ItemStatus
from asfanut.util import http
from tests.factories import make_analysis, make_item, make_profile


@pytest.fixture
def remote(tmp_path):
    client = TestClient(create_app(str(tmp_path / "server.db")))
    return Storage(RemoteBackend("http://testserver/api", session=client))


def test_remote_empty_store(remote):
    assert remote.get_profile() is None
    assert remote.get_items() == []


def test_remote_profile_round_trip(remote):
    remote.save_profile(make_profile())
    assert remote.get_profile() == make_profile()


def test_remote_items_order_upsert_delete(remote):
    remote.save_item(make_item("old", created_at=1, analysis=make_analysis()))
    remote.save_item(make_item("new", created_at=2))
    assert [i.id for i in remote.get_items()] == ["new", "old"]

    remote.save_item(make_item("old", created_at=1, status=ItemStatus.SOLD))
    items = {i.id: i for i in remote.get_items()}
    assert len(items) == 2
    assert items["old"].status is ItemStatus.SOLD
    assert items["old"].analysis is None

    remote.delete_item("old")
    remote.delete_item("old")
    assert [i.id for i in remote.get_items()] == ["new"]


def test_remote_matches_local_shape(remote, storage):
    item = make_item("same", analysis=make_analysis(anomalies=("off-center",)))
    remote.save_item(item)
    storage.save_item(item)
    assert remote.get_items() == storage.get_items()


def test_connection_error_becomes_storage_error(monkeypatch):
    def boom(*args, **kwargs):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(http, "get_json", boom)
    backend = RemoteBackend("http://localhost:1/api")
    with pytest.raises(StorageError):
        backend.get_items()


def test_unexpected_payload_becomes_storage_error(monkeypatch):
    monkeypatch.setattr(http, "get_json", lambda *a, **kw: {"not": "a list"})
    with pytest.raises(StorageError):
        RemoteBackend("http://localhost:1/api").get_items()


def test_remote_requires_base_url():
    with pytest.raises(ValueError):
        RemoteBackend("")
