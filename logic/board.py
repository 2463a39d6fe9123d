"""Common capability implemented by every board variant."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Tuple

from errors import GameFinished, NotYourTurn, OutOfBounds
from models import Coord, Outcome

EMPTY = 0
FIRST = 1
SECOND = 2

# all eight neighbour offsets, clockwise from the top-left
AROUND: Tuple[Coord, ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, 1), (1, 1), (1, 0),
    (1, -1), (0, -1),
)


def opponent(side: int) -> int:
    return SECOND if side == FIRST else FIRST


def empty_grid(height: int, width: int, value: int = EMPTY) -> List[List[int]]:
    return [[value] * width for _ in range(height)]


class Board(ABC):
    """A game board owned by a single session.

    Subclasses mutate their state only in :meth:`apply_move`.  A rejected move
    raises a :class:`errors.MoveError` subclass and leaves the board untouched.
    """

    variant: str = ""
    sides: Tuple[int, ...] = (FIRST, SECOND)
    symbols: Dict[int, str] = {}

    def __init__(self, height: int, width: int) -> None:
        self.height = height
        self.width = width
        self.turn: Optional[int] = FIRST if self.sides else None
        self.winner: Optional[int] = None
        self.outcome = Outcome.ONGOING
        self.history: List[tuple] = []

    @abstractmethod
    def apply_move(self, side: Optional[int], *args: int) -> None:
        """Apply one move for ``side`` and update :attr:`outcome`."""

    @abstractmethod
    def evaluate(self) -> Outcome:
        """Compute the current outcome from the board contents."""

    @abstractmethod
    def render(self) -> List[List[str]]:
        """Return one display string per cell."""

    @property
    def cooperative(self) -> bool:
        return not self.sides

    @property
    def finished(self) -> bool:
        return self.outcome.terminal

    def scores(self) -> Dict[int, int]:
        return {}

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def neighbours(self, row: int, col: int) -> Iterable[Coord]:
        for dr, dc in AROUND:
            nr, nc = row + dr, col + dc
            if self.in_bounds(nr, nc):
                yield nr, nc

    def _ensure_active(self) -> None:
        if self.finished:
            raise GameFinished()

    def _ensure_turn(self, side: Optional[int]) -> None:
        if side != self.turn:
            raise NotYourTurn()

    def _ensure_cell(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfBounds()

    def _finish_move(self) -> None:
        """Re-evaluate after a move and hand the turn over while the game runs."""
        self.outcome = self.evaluate()
        if self.finished:
            self.turn = None
        elif self.turn is not None:
            self.turn = opponent(self.turn)
