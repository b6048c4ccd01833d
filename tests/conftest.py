import os
import sys
import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Tests always run against a throwaway in-memory database.
os.environ["DATABASE_URL"] = "sqlite://"

from gamestore_api.main import app
from gamestore_api.db import engine, SessionLocal
from gamestore_api.models import Base
from gamestore_api.utils.rate_limit import LoginThrottle

ADMIN_USER = "admin"
ADMIN_PASSWORD = "admin123"


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    app.state.login_throttle = LoginThrottle()
    yield


def run_first_setup(client: TestClient) -> None:
    resp = client.post("/first_run", json={
        "admin_username": ADMIN_USER,
        "admin_password": ADMIN_PASSWORD,
        "query_limit": 50,
    })
    assert resp.status_code == 200


def get_authenticated_client() -> TestClient:
    client = TestClient(app)
    run_first_setup(client)

    login_data = {
        "username": ADMIN_USER,
        "password": ADMIN_PASSWORD,
    }
    resp = client.post("/auth/login", json=login_data)
    assert resp.status_code == 200
    token = resp.json()["access_token"]

    # Set auth header
    client.headers.update({"Authorization": f"Bearer {token}"})
    return client


@pytest.fixture
def client():
    return get_authenticated_client()


@pytest.fixture
def public_client():
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def make_game(client: TestClient, title: str = "Test Game", **extra) -> dict:
    body = {"title": title, "description": f"{title} description"}
    body.update(extra)
    resp = client.post("/games/", json=body)
    assert resp.status_code == 200, resp.text
    return resp.json()["game"]


def submit_review(client: TestClient, game_id: int, rating: int, user_name: str = "player") -> dict:
    resp = client.post(f"/games/{game_id}/reviews/", json={
        "user_name": user_name,
        "rating": rating,
        "review_text": f"{user_name} gives it {rating}",
    })
    assert resp.status_code == 200, resp.text
    return resp.json()["review"]
