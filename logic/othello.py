"""Othello / Reversi on the standard 8×8 board."""
from __future__ import annotations
from typing import Dict, List, Optional

from errors import Unplaceable
from models import Coord, Outcome
from logic.board import AROUND, EMPTY, FIRST, SECOND, Board, empty_grid, opponent

BLACK, WHITE = FIRST, SECOND
SIZE = 8

PLACEABLE_SYMBOL = "➕"
EMPTY_SYMBOL = "➖"


class Othello(Board):
    variant = "reversi"
    symbols = {BLACK: "⚫", WHITE: "⚪"}

    def __init__(self) -> None:
        super().__init__(SIZE, SIZE)
        self.grid: List[List[int]] = empty_grid(SIZE, SIZE)
        self.grid[3][3] = WHITE
        self.grid[3][4] = BLACK
        self.grid[4][3] = BLACK
        self.grid[4][4] = WHITE

    def _ray(self, side: int, row: int, col: int, dr: int, dc: int) -> List[Coord]:
        """Return the opponent run captured along one direction, or ``[]``.

        The walk stops at the first cell that is not an opponent piece.  It
        only counts as a capture line when that cell is inside the board and
        holds one of ``side``'s own pieces.
        """
        enemy = opponent(side)
        run: List[Coord] = []
        r, c = row + dr, col + dc
        while self.in_bounds(r, c) and self.grid[r][c] == enemy:
            run.append((r, c))
            r += dr
            c += dc
        if run and self.in_bounds(r, c) and self.grid[r][c] == side:
            return run
        return []

    def captures(self, side: int, row: int, col: int) -> List[Coord]:
        """All cells flipped by ``side`` placing at ``(row, col)``."""
        if not self.in_bounds(row, col) or self.grid[row][col] != EMPTY:
            return []
        flipped: List[Coord] = []
        for dr, dc in AROUND:
            flipped.extend(self._ray(side, row, col, dr, dc))
        return flipped

    def is_legal(self, side: int, row: int, col: int) -> bool:
        if not self.in_bounds(row, col) or self.grid[row][col] != EMPTY:
            return False
        return any(self._ray(side, row, col, dr, dc) for dr, dc in AROUND)

    def legal_moves(self, side: int) -> List[Coord]:
        return [
            (r, c)
            for r in range(SIZE)
            for c in range(SIZE)
            if self.is_legal(side, r, c)
        ]

    def can_move(self, side: int) -> bool:
        return any(
            self.is_legal(side, r, c) for r in range(SIZE) for c in range(SIZE)
        )

    def place(self, side: Optional[int], row: int, col: int) -> List[Coord]:
        self._ensure_active()
        self._ensure_cell(row, col)
        self._ensure_turn(side)
        flipped = self.captures(side, row, col)
        if not flipped:
            raise Unplaceable()

        self.grid[row][col] = side
        for r, c in flipped:
            self.grid[r][c] = side
        self.history.append((side, row, col))

        enemy = opponent(side)
        if self.can_move(enemy):
            self.turn = enemy
        elif not self.can_move(side):
            self.outcome = self.evaluate_end()
            self.turn = None
        # otherwise the opponent must pass and ``side`` keeps the turn
        return flipped

    def apply_move(self, side: Optional[int], *args: int) -> None:
        row, col = args
        self.place(side, row, col)

    def scores(self) -> Dict[int, int]:
        counts = {BLACK: 0, WHITE: 0}
        for row in self.grid:
            for cell in row:
                if cell in counts:
                    counts[cell] += 1
        return counts

    def evaluate_end(self) -> Outcome:
        counts = self.scores()
        if counts[BLACK] == counts[WHITE]:
            self.winner = None
            return Outcome.DRAW
        self.winner = BLACK if counts[BLACK] > counts[WHITE] else WHITE
        return Outcome.WIN

    def evaluate(self) -> Outcome:
        if self.can_move(BLACK) or self.can_move(WHITE):
            return Outcome.ONGOING
        return self.evaluate_end()

    def render(self) -> List[List[str]]:
        rows: List[List[str]] = []
        for r in range(SIZE):
            row: List[str] = []
            for c in range(SIZE):
                cell = self.grid[r][c]
                if cell != EMPTY:
                    row.append(self.symbols[cell])
                elif not self.finished and self.is_legal(self.turn, r, c):
                    row.append(PLACEABLE_SYMBOL)
                else:
                    row.append(EMPTY_SYMBOL)
            rows.append(row)
        return rows
