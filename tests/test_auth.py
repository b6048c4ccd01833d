from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from conftest import ADMIN_USER, ADMIN_PASSWORD, run_first_setup
from gamestore_api.main import app
from gamestore_api.models.admin_session import AdminSession
from gamestore_api.utils.jwt import create_access_token


def test_login_returns_token_and_sets_cookie(public_client: TestClient):
    run_first_setup(public_client)
    resp = public_client.post("/auth/login", json={"username": ADMIN_USER, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    body = resp.json()
    assert body["token_type"] == "bearer"
    assert body["access_token"]

    set_cookie = resp.headers["set-cookie"]
    assert "auth_token=" in set_cookie
    assert "HttpOnly" in set_cookie
    assert "samesite=lax" in set_cookie.lower()


def test_login_wrong_password(public_client: TestClient):
    run_first_setup(public_client)
    resp = public_client.post("/auth/login", json={"username": ADMIN_USER, "password": "nope"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid credentials"


def test_login_unknown_user(public_client: TestClient):
    run_first_setup(public_client)
    resp = public_client.post("/auth/login", json={"username": "ghost", "password": "whatever"})
    assert resp.status_code == 401


def test_repeated_failures_are_throttled(public_client: TestClient):
    run_first_setup(public_client)
    for _ in range(3):
        resp = public_client.post("/auth/login", json={"username": ADMIN_USER, "password": "bad"})
        assert resp.status_code == 401

    resp = public_client.post("/auth/login", json={"username": ADMIN_USER, "password": ADMIN_PASSWORD})
    assert resp.status_code == 429
    assert int(resp.headers["Retry-After"]) > 0


def test_cookie_alone_authenticates():
    cookie_client = TestClient(app)
    run_first_setup(cookie_client)
    resp = cookie_client.post("/auth/login", json={"username": ADMIN_USER, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200

    resp = cookie_client.get("/auth/me")
    assert resp.status_code == 200
    assert resp.json()["username"] == ADMIN_USER


def test_admin_routes_require_auth(public_client: TestClient):
    resp = public_client.post("/games/", json={"title": "X", "description": "Y"})
    assert resp.status_code == 401

    resp = public_client.get("/admin/reviews/")
    assert resp.status_code == 401


def test_prefix_style_token_is_rejected(public_client: TestClient):
    run_first_setup(public_client)
    resp = public_client.get("/auth/me", headers={"Authorization": "Bearer auth_123_abc"})
    assert resp.status_code == 401

    resp = public_client.get("/auth/me", headers={"Cookie": "auth_token=auth_123_abc"})
    assert resp.status_code == 401


def test_non_admin_role_is_forbidden(client: TestClient, db):
    session = db.query(AdminSession).first()
    token = create_access_token(db, {
        "sub": str(session.admin_id),
        "role": "viewer",
        "sid": session.id,
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
    })
    resp = TestClient(app).get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 403


def test_logout_revokes_session(client: TestClient):
    assert client.get("/auth/me").status_code == 200

    resp = client.post("/auth/logout")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Logged out successfully"

    # The bearer header still carries the old token, but its session is gone.
    resp = client.get("/auth/me")
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Session expired or revoked"


def test_expired_session_is_rejected(client: TestClient, db):
    session = db.query(AdminSession).first()
    session.expires_at = datetime.now(timezone.utc) - timedelta(minutes=1)
    db.commit()

    resp = client.get("/auth/me")
    assert resp.status_code == 401


def test_change_password(client: TestClient):
    resp = client.post("/auth/change-password", json={
        "current_password": "wrong-one",
        "new_password": "brandnew1",
    })
    assert resp.status_code == 401

    resp = client.post("/auth/change-password", json={
        "current_password": ADMIN_PASSWORD,
        "new_password": "brandnew1",
    })
    assert resp.status_code == 200

    fresh = TestClient(app)
    assert fresh.post("/auth/login", json={"username": ADMIN_USER, "password": ADMIN_PASSWORD}).status_code == 401
    assert fresh.post("/auth/login", json={"username": ADMIN_USER, "password": "brandnew1"}).status_code == 200
