import pytest
from fastapi.testclient import TestClient

from conftest import make_game


@pytest.fixture
def catalog(client: TestClient):
    action = client.post("/categories/", json={"name": "Action"}).json()
    puzzle = client.post("/categories/", json={"name": "Puzzle"}).json()
    pc = client.post("/platforms/", json={"name": "PC", "code": "pc"}).json()
    switch = client.post("/platforms/", json={"name": "Switch", "code": "switch"}).json()

    games = {
        "doom": make_game(client, "Doom", description="Demon shooter",
                          category_ids=[action["id"]], platform_ids=[pc["id"]], initial_rating=5),
        "tetris": make_game(client, "Tetris", description="Falling blocks puzzle",
                            category_ids=[puzzle["id"]], platform_ids=[pc["id"], switch["id"]], initial_rating=3),
        "zelda": make_game(client, "Zelda", description="Action adventure with puzzles",
                           category_ids=[action["id"], puzzle["id"]], platform_ids=[switch["id"]]),
    }
    return {"action": action, "puzzle": puzzle, "pc": pc, "switch": switch, "games": games}


def titles(resp):
    assert resp.status_code == 200, resp.text
    return [g["title"] for g in resp.json()["results"]]


def test_text_matches_title_or_description(public_client: TestClient, catalog):
    assert titles(public_client.get("/search/", params={"q": "doom"})) == ["Doom"]
    assert titles(public_client.get("/search/", params={"q": "PUZZLE"})) == ["Tetris", "Zelda"]


def test_empty_query_returns_everything(public_client: TestClient, catalog):
    resp = public_client.get("/search/")
    assert titles(resp) == ["Doom", "Tetris", "Zelda"]
    assert resp.json()["count"] == 3


def test_category_filter(public_client: TestClient, catalog):
    resp = public_client.get("/search/", params={"category_id": catalog["action"]["id"]})
    assert titles(resp) == ["Doom", "Zelda"]
    assert resp.json()["category_id"] == catalog["action"]["id"]


def test_text_and_category_combine(public_client: TestClient, catalog):
    resp = public_client.get("/search/", params={"q": "puzzle", "category_id": catalog["action"]["id"]})
    assert titles(resp) == ["Zelda"]


def test_platform_and_category_combine_without_duplicates(public_client: TestClient, catalog):
    resp = public_client.get("/search/", params={
        "category_id": catalog["puzzle"]["id"],
        "platform_id": catalog["switch"]["id"],
    })
    assert titles(resp) == ["Tetris", "Zelda"]


def test_sort_by_rating_puts_unrated_last(public_client: TestClient, catalog):
    resp = public_client.get("/search/", params={"sort": "rating"})
    assert titles(resp) == ["Doom", "Tetris", "Zelda"]
    ratings = [g["average_rating"] for g in resp.json()["results"]]
    assert ratings[-1] is None


def test_sort_newest(public_client: TestClient, catalog):
    assert titles(public_client.get("/search/", params={"sort": "newest"})) == ["Zelda", "Tetris", "Doom"]


def test_pagination(public_client: TestClient, catalog):
    assert titles(public_client.get("/search/", params={"limit": 2})) == ["Doom", "Tetris"]
    assert titles(public_client.get("/search/", params={"limit": 2, "offset": 2})) == ["Zelda"]


def test_invalid_sort(public_client: TestClient, catalog):
    assert public_client.get("/search/", params={"sort": "popularity"}).status_code == 422


def test_no_matches(public_client: TestClient, catalog):
    resp = public_client.get("/search/", params={"q": "nonexistent"})
    assert titles(resp) == []
    assert resp.json()["count"] == 0


def test_wildcard_characters_match_literally(client: TestClient, public_client: TestClient):
    make_game(client, "Alpha")
    make_game(client, "Beta")
    make_game(client, "100% Orange Juice")
    make_game(client, "snake_case")

    assert titles(public_client.get("/search/", params={"q": "%"})) == ["100% Orange Juice"]
    assert titles(public_client.get("/search/", params={"q": "_"})) == ["snake_case"]
