"""REST API サーバーのテスト（TestClient）。"""
import pytest
from fastapi.testclient import TestClient

from asfanut.server import create_app


@pytest.fixture
def client(tmp_path):
    app = create_app(str(tmp_path / "server.db"))
    return TestClient(app)


def _item(item_id, created_at, **extra):
    body = {
        "id": item_id,
        "createdAt": created_at,
        "type": "מטבע",
        "frontImage": "data:image/jpeg;base64,AA==",
        "backImage": "data:image/jpeg;base64,AA==",
        "analysis": None,
        "userPrice": "10",
        "status": "AVAILABLE",
    }
    body.update(extra)
    return body


def test_health_lists_tables(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert "items" in data["tables"]
    assert "store_profile" in data["tables"]


def test_profile_absent_returns_null(client):
    r = client.get("/api/profile")
    assert r.status_code == 200
    assert r.json() is None


def test_profile_save_then_read(client):
    profile = {"storeName": "S", "ownerName": "O", "password": "p", "apiKey": "k", "termsAccepted": True}
    r = client.post("/api/profile", json=profile)
    assert r.status_code == 200
    assert r.json()["message"] == "Profile saved successfully"
    assert client.get("/api/profile").json() == profile

    client.post("/api/profile", json={**profile, "storeName": "S2"})
    assert client.get("/api/profile").json()["storeName"] == "S2"


def test_items_sorted_by_created_at_desc(client):
    for item_id, ts in (("a", 1), ("c", 3), ("b", 2)):
        assert client.post("/api/items", json=_item(item_id, ts)).status_code == 200
    assert [i["id"] for i in client.get("/api/items").json()] == ["c", "b", "a"]


def test_save_item_upserts_and_returns_id(client):
    r = client.post("/api/items", json=_item("x", 5))
    assert r.json() == {"message": "Item saved successfully", "id": "x"}
    client.post("/api/items", json=_item("x", 5, status="SOLD", userPrice="20"))
    items = client.get("/api/items").json()
    assert len(items) == 1
    assert items[0]["status"] == "SOLD"
    assert items[0]["userPrice"] == "20"


def test_unknown_fields_are_stored_verbatim(client):
    client.post("/api/items", json=_item("x", 5, note="keep me"))
    assert client.get("/api/items").json()[0]["note"] == "keep me"


def test_save_item_without_id_is_rejected(client):
    body = _item("x", 5)
    del body["id"]
    assert client.post("/api/items", json=body).status_code == 422
    assert client.get("/api/items").json() == []


def test_delete_item_and_missing_id(client):
    client.post("/api/items", json=_item("x", 5))
    r = client.delete("/api/items/x")
    assert r.status_code == 200
    assert client.get("/api/items").json() == []
    assert client.delete("/api/items/never-existed").status_code == 200


def test_get_single_item(client):
    client.post("/api/items", json=_item("x", 5))
    assert client.get("/api/items/x").json()["id"] == "x"
    assert client.get("/api/items/missing").status_code == 404
