from tokenapi.config import Settings
from tokenapi.main import create_app
from fastapi.testclient import TestClient


def test_health_reports_entity_counts(client, register_user):
    register_user("alice")
    client.post("/api/subscribe", json={"email": "bob@x.com"})

    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["entity_counts"]["users"] == 1
    assert body["entity_counts"]["trading_pairs"] == 3
    assert body["entity_counts"]["subscribers"] == 1
    assert body["entity_counts"]["orders"] == 0


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "running" in response.json()["message"]


def test_each_app_gets_its_own_store(client, register_user):
    register_user("alice")

    fresh = create_app(Settings(_env_file=None))
    with TestClient(fresh) as other:
        counts = other.get("/api/health").json()["entity_counts"]

    assert counts["users"] == 0


def test_seeding_can_be_disabled():
    app = create_app(Settings(_env_file=None, SEED_DEFAULT_DATA=False))
    with TestClient(app) as client:
        counts = client.get("/api/health").json()["entity_counts"]

    assert counts["trading_pairs"] == 0
