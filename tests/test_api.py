from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from conftest import make_game
from game2048 import settings
from game2048.api import ANY_METHOD, app, limiter
from game2048.session import GameSession, get_session

BODY_METHODS = [m for m in ANY_METHOD if m != "HEAD"]
NON_POST_METHODS = [m for m in ANY_METHOD if m != "POST"]


def _assert_snapshot(data: dict) -> None:
    assert set(data) == {"board", "score", "gameOver", "won"}
    assert len(data["board"]) == 4
    assert all(len(row) == 4 for row in data["board"])


@pytest.mark.parametrize("method", BODY_METHODS)
def test_new_game_accepts_any_method(client: TestClient, method: str) -> None:
    resp = client.request(method, "/api/new-game")
    assert resp.status_code == 200
    data = resp.json()
    _assert_snapshot(data)
    assert data["score"] == 0
    assert data["gameOver"] is False
    assert data["won"] is False
    assert len([v for row in data["board"] for v in row if v]) == 2


@pytest.mark.parametrize("method", BODY_METHODS)
def test_state_accepts_any_method(client: TestClient, method: str) -> None:
    resp = client.request(method, "/api/state")
    assert resp.status_code == 200
    _assert_snapshot(resp.json())


@pytest.mark.parametrize("path", ["/api/new-game", "/api/state"])
def test_head_is_answered_by_api_routes(client: TestClient, path: str) -> None:
    assert client.head(path).status_code == 200


def test_state_creates_game_lazily(client: TestClient) -> None:
    resp = client.get("/api/state")
    assert resp.status_code == 200
    _assert_snapshot(resp.json())
    assert client.get("/api/state").json() == resp.json()


def test_move_applies_direction(client: TestClient, session: GameSession) -> None:
    session._game = make_game([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
    resp = client.post("/api/move", json={"direction": "left"})
    assert resp.status_code == 200
    data = resp.json()
    _assert_snapshot(data)
    assert data["board"][0][0] == 4
    assert data["score"] == 4


@pytest.mark.parametrize("content_type", ["application/x-www-form-urlencoded", "text/plain", None])
def test_move_body_is_json_whatever_the_content_type(
    client: TestClient, session: GameSession, content_type: str | None
) -> None:
    session._game = make_game([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
    headers = {"Content-Type": content_type} if content_type else {}
    resp = client.post("/api/move", content=b'{"direction":"left"}', headers=headers)
    assert resp.status_code == 200
    assert resp.json()["score"] == 4


def test_unchanged_move_still_returns_board(client: TestClient, session: GameSession) -> None:
    board = [[2, 4, 8, 16], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]]
    session._game = make_game(board)
    resp = client.post("/api/move", json={"direction": "up"})
    assert resp.status_code == 200
    assert resp.json()["board"] == board


def test_invalid_direction_is_rejected_without_mutation(client: TestClient) -> None:
    before = client.get("/api/state").json()
    for direction in ("Up", "north", ""):
        resp = client.post("/api/move", json={"direction": direction})
        assert resp.status_code == 400
        assert resp.json() == {"detail": "Invalid direction"}
    assert client.get("/api/state").json() == before


@pytest.mark.parametrize("body", [b"{not json", b"", b'{"dir": "left"}', b'"left"', b'{"direction": 3}'])
def test_malformed_payload_is_rejected(client: TestClient, body: bytes) -> None:
    before = client.get("/api/state").json()
    resp = client.post("/api/move", content=body, headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json() == {"detail": "Invalid request"}
    assert client.get("/api/state").json() == before


@pytest.mark.parametrize("method", NON_POST_METHODS)
def test_move_requires_post(client: TestClient, method: str) -> None:
    before = client.get("/api/state").json()
    resp = client.request(method, "/api/move")
    assert resp.status_code == 405
    assert client.get("/api/state").json() == before


def test_cors_allows_any_origin(client: TestClient) -> None:
    resp = client.get("/api/state", headers={"Origin": "http://example.com"})
    assert resp.headers["access-control-allow-origin"] == "*"


def test_web_client_is_served(client: TestClient) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    assert "2048" in resp.text


@pytest.fixture()
def limited_client(monkeypatch: pytest.MonkeyPatch, session: GameSession) -> Generator[TestClient, None, None]:
    monkeypatch.setenv("GAME2048_RATE_LIMIT", "2/minute")
    settings.get_settings.cache_clear()
    limiter.enabled = True
    limiter.reset()
    app.dependency_overrides[get_session] = lambda: session
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    limiter.reset()
    settings.get_settings.cache_clear()


def test_rate_limit_exceeded_returns_429(limited_client: TestClient) -> None:
    assert limited_client.get("/api/state").status_code == 200
    assert limited_client.get("/api/state").status_code == 200
    assert limited_client.get("/api/state").status_code == 429
