import pytest

from sexed.app import create_app
from sexed.routes.community import CHANNELS_KEY
from sexed.utils import kv_store


def test_health(client):
    assert client.get("/api/health").get_json() == {"status": "ok"}


def test_routes_listing(client):
    routes = client.get("/routes").get_data(as_text=True).split("\n")
    assert "/api/resources" in routes
    assert "/api/community/posts/<post_id>/like" in routes


def test_missing_database_url_fails_fast():
    with pytest.raises(RuntimeError):
        create_app({"SQLALCHEMY_DATABASE_URI": None})


def test_unknown_route_returns_json_error(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.get_json()["success"] is False


def test_init_data_seeds_channels_once(client):
    client.post("/api/init-data")
    channels = client.get("/api/community/channels").get_json()["channels"]
    assert len(channels) == 5

    kv_store.update(CHANNELS_KEY, lambda chs: chs[0].update(posts=7))
    client.post("/api/init-data")

    assert kv_store.get(CHANNELS_KEY)[0]["posts"] == 7


def test_init_channels_resets_counters(client, admin_headers):
    client.post("/api/init-data")
    kv_store.update(CHANNELS_KEY, lambda chs: chs[0].update(posts=7))

    response = client.post("/api/init-channels", headers=admin_headers)

    assert response.status_code == 200
    assert kv_store.get(CHANNELS_KEY)[0]["posts"] == 0


def test_init_channels_requires_admin(client, doctor_headers):
    assert client.post("/api/init-channels", headers=doctor_headers).status_code == 403


def test_database_info_hides_password_hashes(client, students, student, admin_headers):
    body = client.get("/api/database/info", headers=admin_headers).get_json()

    assert body["success"] is True
    assert body["tables"]["students"] == "✓ Connected (2 records found)"
    assert {u["username"] for u in body["sampleData"]["users"]} == {"alice", "root"}
    assert all("password_hash" not in u for u in body["sampleData"]["users"])
    assert body["sampleData"]["students"][0]["registration_number"] == "SCT211-0001/2021"


def test_unexpected_errors_become_json_500(app, client, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("store offline")

    monkeypatch.setattr(kv_store, "get", boom)

    response = client.get("/api/resources")

    assert response.status_code == 500
    assert response.get_json() == {"success": False, "error": "store offline"}
