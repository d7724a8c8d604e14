# session.py
# Holds the current game and serializes access to it.

from typing import Optional
import logging
import random
import threading

from . import core

logger = logging.getLogger(__name__)


class GameSession:
    """
    Owns at most one live game, created lazily on first access.

    Every operation runs under the session lock and returns a snapshot, so
    overlapping requests never observe or mutate a half-moved board.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng
        self._game: Optional[core.Game] = None
        self._lock = threading.Lock()

    def _current(self) -> core.Game:
        if self._game is None:
            logger.info("No game in progress, starting one")
            self._game = core.Game(self._rng)
        return self._game

    def new_game(self) -> dict:
        """Discards any current game and returns the fresh game's snapshot."""
        with self._lock:
            self._game = core.Game(self._rng)
            logger.info("Started a new game")
            return self._game.snapshot()

    def move(self, direction: core.DIRECTION) -> dict:
        """Applies a move and returns the snapshot whether or not the board changed."""
        with self._lock:
            game = self._current()
            game.move(direction)
            return game.snapshot()

    def state(self) -> dict:
        with self._lock:
            return self._current().snapshot()


_session = GameSession()


def get_session() -> GameSession:
    """Returns the process-wide session (FastAPI dependency)."""
    return _session
