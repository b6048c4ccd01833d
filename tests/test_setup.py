from fastapi.testclient import TestClient

from conftest import ADMIN_USER, ADMIN_PASSWORD


def test_first_run_status_flips_after_setup(public_client: TestClient):
    resp = public_client.get("/first_run/status")
    assert resp.status_code == 200
    assert resp.json() is False

    resp = public_client.post("/first_run", json={
        "admin_username": ADMIN_USER,
        "admin_password": ADMIN_PASSWORD,
    })
    assert resp.status_code == 200
    assert resp.json()["success"] is True

    assert public_client.get("/first_run/status").json() is True


def test_first_run_only_once(public_client: TestClient):
    body = {"admin_username": ADMIN_USER, "admin_password": ADMIN_PASSWORD}
    assert public_client.post("/first_run", json=body).status_code == 200

    resp = public_client.post("/first_run", json={"admin_username": "other", "admin_password": "secret99"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Setup already completed"


def test_first_run_rejects_short_password(public_client: TestClient):
    resp = public_client.post("/first_run", json={"admin_username": ADMIN_USER, "admin_password": "123"})
    assert resp.status_code == 422
