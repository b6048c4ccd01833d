from fastapi.testclient import TestClient
from gamestore_api.main import app

client = TestClient(app)

def test_read_root():
    resp = client.get("/")
    assert resp.status_code == 200
    data = resp.json()
    assert data["app_name"] == "GameStore API"
    assert data["version"] == "0.1"
    assert isinstance(data["build_time"], int)


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["ok"] is True
