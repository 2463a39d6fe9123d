from __future__ import annotations
from typing import List, Optional

from errors import CellNotEmpty
from models import Outcome
from logic.board import EMPTY, FIRST, SECOND, Board, empty_grid

CROSS, NOUGHT = FIRST, SECOND

EMPTY_SYMBOL = "➕"
ENDED_SYMBOL = "➖"

# rows, columns and both diagonals
LINES = (
    ((0, 0), (0, 1), (0, 2)),
    ((1, 0), (1, 1), (1, 2)),
    ((2, 0), (2, 1), (2, 2)),
    ((0, 0), (1, 0), (2, 0)),
    ((0, 1), (1, 1), (2, 1)),
    ((0, 2), (1, 2), (2, 2)),
    ((0, 0), (1, 1), (2, 2)),
    ((0, 2), (1, 1), (2, 0)),
)


class TicTacToe(Board):
    variant = "tictactoe"
    symbols = {CROSS: "❌", NOUGHT: "⭕"}

    def __init__(self) -> None:
        super().__init__(3, 3)
        self.grid: List[List[int]] = empty_grid(3, 3)

    def place(self, side: Optional[int], row: int, col: int) -> None:
        self._ensure_active()
        self._ensure_cell(row, col)
        self._ensure_turn(side)
        if self.grid[row][col] != EMPTY:
            raise CellNotEmpty()
        self.grid[row][col] = side
        self.history.append((side, row, col))
        self._finish_move()

    def apply_move(self, side: Optional[int], *args: int) -> None:
        row, col = args
        self.place(side, row, col)

    def evaluate(self) -> Outcome:
        for a, b, c in LINES:
            value = self.grid[a[0]][a[1]]
            if value != EMPTY and value == self.grid[b[0]][b[1]] == self.grid[c[0]][c[1]]:
                self.winner = value
                return Outcome.WIN
        if all(cell != EMPTY for row in self.grid for cell in row):
            return Outcome.DRAW
        return Outcome.ONGOING

    def render(self) -> List[List[str]]:
        blank = ENDED_SYMBOL if self.finished else EMPTY_SYMBOL
        return [
            [self.symbols.get(cell, blank) for cell in row]
            for row in self.grid
        ]
