from __future__ import annotations
from typing import List, Optional

from errors import ColumnFilled, InvalidBoard, OutOfBounds
from models import Coord, Outcome
from logic.board import EMPTY, FIRST, SECOND, Board, empty_grid

PLAYER_A, PLAYER_B = FIRST, SECOND

HEIGHT = 6
WIDTH = 7
CONNECT = 4

# right, down, down-right, down-left; the opposite directions are covered by
# anchoring the scan at every filled cell
DIRECTIONS = ((0, 1), (1, 0), (1, 1), (1, -1))

EMPTY_SYMBOL = "➕"
ENDED_SYMBOL = "➖"


class ConnectFour(Board):
    """Gravity board; row ``0`` is the top of the column."""

    variant = "connectfour"
    symbols = {PLAYER_A: "🔴", PLAYER_B: "🟡"}

    def __init__(self, height: int = HEIGHT, width: int = WIDTH) -> None:
        if height < CONNECT or width < CONNECT:
            raise InvalidBoard(
                f"Connect Four needs at least {CONNECT}x{CONNECT} cells, got {height}x{width}"
            )
        super().__init__(height, width)
        self.grid: List[List[int]] = empty_grid(height, width)
        self.line: List[Coord] = []

    def drop(self, side: Optional[int], col: int) -> int:
        """Drop a piece for ``side`` into ``col`` and return the landing row."""
        self._ensure_active()
        if not 0 <= col < self.width:
            raise OutOfBounds()
        self._ensure_turn(side)
        if self.grid[0][col] != EMPTY:
            raise ColumnFilled()
        row = self.height - 1
        while self.grid[row][col] != EMPTY:
            row -= 1
        self.grid[row][col] = side
        self.history.append((side, col))
        self._finish_move()
        return row

    def apply_move(self, side: Optional[int], *args: int) -> None:
        (col,) = args
        self.drop(side, col)

    def _line_from(self, row: int, col: int, dr: int, dc: int) -> List[Coord]:
        value = self.grid[row][col]
        cells = [(row, col)]
        r, c = row + dr, col + dc
        while len(cells) < CONNECT and self.in_bounds(r, c) and self.grid[r][c] == value:
            cells.append((r, c))
            r += dr
            c += dc
        return cells

    def evaluate(self) -> Outcome:
        full = True
        for r in range(self.height):
            for c in range(self.width):
                if self.grid[r][c] == EMPTY:
                    full = False
                    continue
                for dr, dc in DIRECTIONS:
                    cells = self._line_from(r, c, dr, dc)
                    if len(cells) == CONNECT:
                        self.winner = self.grid[r][c]
                        self.line = cells
                        return Outcome.WIN
        return Outcome.DRAW if full else Outcome.ONGOING

    def render(self) -> List[List[str]]:
        blank = ENDED_SYMBOL if self.finished else EMPTY_SYMBOL
        return [
            [self.symbols.get(cell, blank) for cell in row]
            for row in self.grid
        ]
