# core.py
# This file holds the one authoritative 4x4 board engine for the 2048 game.

from enum import Enum
from typing import List, Optional, Tuple
import logging
import random

logger = logging.getLogger(__name__)

BOARD_SIZE = 4
WIN_TILE = 2048
FOUR_PROBABILITY = 0.1

Board = List[List[int]]

# Seeded once per process; games created without their own generator share it.
_default_rng = random.Random()


def seed_default_rng(seed: Optional[int]) -> None:
    """Reseeds the process-wide generator (used once at start-up)."""
    _default_rng.seed(seed)


class DIRECTION(Enum):
    """Represents the possible move directions."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def from_name(cls, name: str) -> "DIRECTION":
        """
        Parses the textual direction used by clients.
        Args:
            name (str): One of "up", "down", "left", "right" (case-sensitive).
        Returns:
            DIRECTION: The matching member.
        Raises:
            ValueError: If the name is not an exact match.
        """
        for member in cls:
            if member.value == name:
                return member
        raise ValueError(f"Invalid direction: {name!r}")


# --- Board Helper Functions ---

def empty_board() -> Board:
    return [[0] * BOARD_SIZE for _ in range(BOARD_SIZE)]


def copy_board(board: Board) -> Board:
    return [list(row) for row in board]


def get_empty_cells(board: Board) -> List[Tuple[int, int]]:
    """
    Get coordinates of empty (0-value) cells in the given board.
    Args:
        board (Board): The board to check.
    Returns:
        List[Tuple[int, int]]: List of (row, col) tuples for empty cells, row-major.
    """
    empty_cells = []
    for row in range(len(board)):
        for col in range(len(board[row])):
            if board[row][col] == 0:
                empty_cells.append((row, col))
    return empty_cells


def transpose_board(board: Board) -> Board:
    """Swaps rows and columns, returning a new board."""
    return [list(column) for column in zip(*board)]


def reverse_rows(board: Board) -> Board:
    """Mirrors the board horizontally, returning a new board."""
    return [row[::-1] for row in board]


def has_adjacent_pair(board: Board) -> bool:
    """
    Checks whether any two horizontally or vertically adjacent cells hold equal values.
    Args:
        board (Board): The board to check.
    Returns:
        bool: True if at least one equal neighbour pair exists.
    """
    n = len(board)
    for r in range(n):
        for c in range(n - 1):
            if board[r][c] == board[r][c + 1]:
                return True
    for c in range(n):
        for r in range(n - 1):
            if board[r][c] == board[r + 1][c]:
                return True
    return False


# --- Line Compaction (Core Move Logic) ---

def slide_line_left(line: List[int]) -> Tuple[List[int], int]:
    """
    Slides and merges a single line towards index 0.

    Cells are visited from index 1 outwards. Each tile first slides through the
    empty cells ahead of it, then merges into the tile directly ahead when the
    values match and that cell was not itself produced by a merge in this pass.
    So [2, 2, 2, 2] becomes [4, 4, 0, 0], never [8, 0, 0, 0].

    Args:
        line (List[int]): The line to process; it is not modified.
    Returns:
        Tuple[List[int], int]: The new line and the score gained from merges.
    """
    line = list(line)
    merged = [False] * len(line)
    score_gained = 0

    for j in range(1, len(line)):
        if line[j] == 0:
            continue

        k = j
        while k > 0 and line[k - 1] == 0:
            line[k - 1], line[k] = line[k], 0
            k -= 1

        if k > 0 and line[k - 1] == line[k] and not merged[k - 1]:
            line[k - 1] *= 2
            line[k] = 0
            score_gained += line[k - 1]
            merged[k - 1] = True

    return line, score_gained


def _slide_all_lines_left(board: Board) -> Tuple[Board, int]:
    total_score = 0
    new_board = []
    for row in board:
        new_row, score_from_row = slide_line_left(row)
        new_board.append(new_row)
        total_score += score_from_row
    return new_board, total_score


def compact_board(board: Board, direction: DIRECTION) -> Tuple[Board, int]:
    """
    Applies one directional compaction to a copy of the board.

    Every direction reuses the leftward line routine: Right works on mirrored
    rows, Up on the transpose and Down on the mirrored transpose.

    Args:
        board (Board): The current board.
        direction (DIRECTION): The direction to move.
    Returns:
        Tuple[Board, int]: The board after sliding/merging and the score gained.
    """
    if direction == DIRECTION.LEFT:
        return _slide_all_lines_left(board)

    if direction == DIRECTION.RIGHT:
        processed, score = _slide_all_lines_left(reverse_rows(board))
        return reverse_rows(processed), score

    if direction == DIRECTION.UP:
        processed, score = _slide_all_lines_left(transpose_board(board))
        return transpose_board(processed), score

    if direction == DIRECTION.DOWN:
        processed, score = _slide_all_lines_left(reverse_rows(transpose_board(board)))
        return transpose_board(reverse_rows(processed)), score

    raise ValueError("Invalid direction specified for compact_board.")


# --- Game State ---

class Game:
    """A single 2048 game: board, score and the won / game-over flags."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else _default_rng
        self.board: Board = empty_board()
        self.score = 0
        self.game_over = False
        self.won = False
        self.initialize()

    def initialize(self) -> None:
        """Resets to an empty board with two random tiles."""
        self.board = empty_board()
        self.score = 0
        self.game_over = False
        self.won = False
        self.spawn_tile()
        self.spawn_tile()

    def spawn_tile(self) -> None:
        """
        Places a 2 (90%) or a 4 (10%) on a uniformly chosen empty cell.
        Does nothing when the board is full.
        """
        empty_cells = get_empty_cells(self.board)
        if not empty_cells:
            return
        row, col = self.rng.choice(empty_cells)
        value = 4 if self.rng.random() < FOUR_PROBABILITY else 2
        self.board[row][col] = value
        logger.debug("Spawned %d at (%d, %d)", value, row, col)

    def move(self, direction: DIRECTION) -> bool:
        """
        Moves every tile in the given direction.
        Args:
            direction (DIRECTION): The direction to move.
        Returns:
            bool: True if the board changed. A move that changes nothing leaves
                  board, score and flags untouched and spawns no tile.
        """
        new_board, score_gained = compact_board(self.board, direction)
        if new_board == self.board:
            logger.debug("Move %s did not change the board", direction.value)
            return False

        self.board = new_board
        self.score += score_gained
        self.spawn_tile()
        self.check_status()
        return True

    def check_status(self) -> None:
        """
        Sets won when a 2048 tile exists (game over is then not evaluated);
        otherwise sets game_over when the board is full with no equal neighbours.
        """
        for row in self.board:
            if WIN_TILE in row:
                if not self.won:
                    logger.info("Reached %d with score %d", WIN_TILE, self.score)
                self.won = True
                return

        if not get_empty_cells(self.board) and not has_adjacent_pair(self.board):
            if not self.game_over:
                logger.info("Game over with score %d", self.score)
            self.game_over = True

    def snapshot(self) -> dict:
        """Returns a detached copy of the state using the wire field names."""
        return {
            "board": copy_board(self.board),
            "score": self.score,
            "gameOver": self.game_over,
            "won": self.won,
        }
