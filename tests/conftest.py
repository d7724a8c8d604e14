from __future__ import annotations

import random
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from game2048 import core
from game2048.api import app, limiter
from game2048.session import GameSession, get_session


def make_game(board: list[list[int]], seed: int = 0, score: int = 0) -> core.Game:
    game = core.Game(random.Random(seed))
    game.board = [list(row) for row in board]
    game.score = score
    return game


@pytest.fixture()
def session() -> GameSession:
    return GameSession(random.Random(1234))


@pytest.fixture()
def client(session: GameSession) -> Generator[TestClient, None, None]:
    limiter.enabled = False
    limiter.reset()
    app.dependency_overrides[get_session] = lambda: session
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    limiter.enabled = True
