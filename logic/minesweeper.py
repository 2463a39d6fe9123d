"""Cooperative Minesweeper played by everyone in the chat."""
from __future__ import annotations

import random
from collections import deque
from typing import Deque, Iterable, List, Optional, Set

from errors import InvalidBoard, NothingToReveal
from models import Coord, Outcome
from logic.board import Board, empty_grid

MINE = -1

MASKED = 0
UNMASKED = 1
FLAGGED = 2
EXPLODED = 3

HEIGHT = 8
WIDTH = 8
MINES = 9

MASKED_SYMBOL = "➕"
FLAG_SYMBOL = "🚩"
MINE_SYMBOL = "💣"
EXPLODED_SYMBOL = "💥"
NUMBER_SYMBOLS = ("➖", "1️⃣", "2️⃣", "3️⃣", "4️⃣", "5️⃣", "6️⃣", "7️⃣", "8️⃣")


class Minesweeper(Board):
    variant = "minesweeper"
    sides = ()

    def __init__(
        self,
        height: int = HEIGHT,
        width: int = WIDTH,
        mines: int = MINES,
        rng: Optional[random.Random] = None,
    ) -> None:
        if height < 1 or width < 1:
            raise InvalidBoard(f"Board must have at least one cell, got {height}x{width}")
        if not 0 <= mines < height * width:
            raise InvalidBoard(
                f"Mine count must be between 0 and {height * width - 1}, got {mines}"
            )
        super().__init__(height, width)
        self.mines = mines
        self.rng = rng or random.Random()
        self.mask: List[List[int]] = empty_grid(height, width, MASKED)
        self.values: List[List[int]] = empty_grid(height, width)
        self.exploded: List[Coord] = []
        # the layout may still be regenerated around the first reveal
        self.relocatable = True
        self._fill(self._lay_mines())

    @classmethod
    def from_mines(cls, height: int, width: int, mines: Iterable[Coord]) -> "Minesweeper":
        """Build a board with a fixed mine layout."""
        positions = set(mines)
        board = cls(height, width, len(positions))
        for r, c in positions:
            if not board.in_bounds(r, c):
                raise InvalidBoard(f"Mine {(r, c)} is outside the board")
        board._fill(positions)
        board.relocatable = False
        return board

    # ------------------------------------------------------------------
    # layout
    # ------------------------------------------------------------------

    def _lay_mines(self, exclude: Set[Coord] = frozenset()) -> Set[Coord]:
        cells = [
            (r, c)
            for r in range(self.height)
            for c in range(self.width)
            if (r, c) not in exclude
        ]
        layout = [True] * self.mines + [False] * (len(cells) - self.mines)
        self.rng.shuffle(layout)
        return {cell for cell, is_mine in zip(cells, layout) if is_mine}

    def _fill(self, mines: Set[Coord]) -> None:
        self.values = empty_grid(self.height, self.width)
        for r, c in mines:
            self.values[r][c] = MINE
        for r in range(self.height):
            for c in range(self.width):
                if self.values[r][c] == MINE:
                    continue
                self.values[r][c] = sum(
                    1 for nr, nc in self.neighbours(r, c) if self.values[nr][nc] == MINE
                )

    def _ensure_opening(self, row: int, col: int) -> None:
        """Regenerate the layout so the first reveal lands on an empty cell.

        The clicked cell and its neighbours are kept free of mines.  On boards
        too dense for that only the clicked cell itself is kept free.
        """
        self.relocatable = False
        if self.values[row][col] == 0:
            return
        area = {(row, col), *self.neighbours(row, col)}
        if self.height * self.width - len(area) < self.mines:
            area = {(row, col)}
        self._fill(self._lay_mines(area))

    # ------------------------------------------------------------------
    # moves
    # ------------------------------------------------------------------

    def is_mine(self, row: int, col: int) -> bool:
        return self.values[row][col] == MINE

    def _explode(self, row: int, col: int) -> None:
        self.mask[row][col] = EXPLODED
        self.exploded.append((row, col))

    def _flood(self, row: int, col: int) -> None:
        queue: Deque[Coord] = deque([(row, col)])
        while queue:
            r, c = queue.popleft()
            if self.mask[r][c] != MASKED:
                continue
            self.mask[r][c] = UNMASKED
            if self.values[r][c] != 0:
                continue
            for nr, nc in self.neighbours(r, c):
                if self.mask[nr][nc] == MASKED:
                    queue.append((nr, nc))

    def _open(self, row: int, col: int) -> None:
        if self.is_mine(row, col):
            self._explode(row, col)
        else:
            self._flood(row, col)

    def _settle(self) -> None:
        self.outcome = self.evaluate()
        if self.finished:
            for r in range(self.height):
                for c in range(self.width):
                    if self.mask[r][c] == MASKED:
                        self.mask[r][c] = UNMASKED

    def reveal(self, row: int, col: int) -> bool:
        """Open a masked cell.  Returns ``False`` when nothing changed."""
        self._ensure_active()
        self._ensure_cell(row, col)
        if self.mask[row][col] != MASKED:
            return False
        if self.relocatable:
            self._ensure_opening(row, col)
        self._open(row, col)
        self._settle()
        return True

    def chord(self, row: int, col: int) -> bool:
        """Resolve the masked neighbours of a revealed number.

        When the flags around the number already account for all of its
        mines, every other masked neighbour is opened.  When the masked and
        flagged neighbours together equal the number, the masked ones are
        flagged instead.
        """
        self._ensure_active()
        self._ensure_cell(row, col)
        count = self.values[row][col]
        if self.mask[row][col] != UNMASKED or count <= 0:
            return False

        flagged: List[Coord] = []
        masked: List[Coord] = []
        for nr, nc in self.neighbours(row, col):
            if self.mask[nr][nc] == FLAGGED:
                flagged.append((nr, nc))
            elif self.mask[nr][nc] == MASKED:
                masked.append((nr, nc))
        if not masked:
            return False

        if len(flagged) == count:
            for r, c in masked:
                if self.mask[r][c] == MASKED:
                    self._open(r, c)
        elif len(flagged) + len(masked) == count:
            for r, c in masked:
                self.mask[r][c] = FLAGGED
        else:
            return False
        self._settle()
        return True

    def toggle_flag(self, row: int, col: int) -> bool:
        self._ensure_active()
        self._ensure_cell(row, col)
        state = self.mask[row][col]
        if state == MASKED:
            self.mask[row][col] = FLAGGED
        elif state == FLAGGED:
            self.mask[row][col] = MASKED
        else:
            return False
        return True

    def click(self, row: int, col: int) -> None:
        """Reveal a masked cell or chord a revealed number."""
        self._ensure_active()
        self._ensure_cell(row, col)
        state = self.mask[row][col]
        if state == MASKED:
            changed = self.reveal(row, col)
        elif state == UNMASKED:
            changed = self.chord(row, col)
        else:
            changed = False
        if not changed:
            raise NothingToReveal()
        self.history.append((row, col))

    def apply_move(self, side: Optional[int], *args: int) -> None:
        row, col = args
        self.click(row, col)

    def evaluate(self) -> Outcome:
        if self.exploded:
            return Outcome.FAILED
        for r in range(self.height):
            for c in range(self.width):
                if self.values[r][c] != MINE and self.mask[r][c] != UNMASKED:
                    return Outcome.ONGOING
        return Outcome.SUCCEEDED

    def render(self) -> List[List[str]]:
        rows: List[List[str]] = []
        for r in range(self.height):
            row: List[str] = []
            for c in range(self.width):
                state = self.mask[r][c]
                if state == MASKED:
                    row.append(MASKED_SYMBOL)
                elif state == FLAGGED:
                    row.append(FLAG_SYMBOL)
                elif state == EXPLODED:
                    row.append(EXPLODED_SYMBOL)
                elif self.is_mine(r, c):
                    row.append(MINE_SYMBOL)
                else:
                    row.append(NUMBER_SYMBOLS[self.values[r][c]])
            rows.append(row)
        return rows
