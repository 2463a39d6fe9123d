from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from errors import NotYourTurn, WrongPlayer


Coord = Tuple[int, int]  # row, col indexes


class Outcome(str, Enum):
    ONGOING = "ongoing"
    WIN = "win"
    DRAW = "draw"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self is not Outcome.ONGOING


@dataclass
class Player:
    user_id: int
    name: str = ""


@dataclass
class Participant:
    """Someone who clicked on a cooperative board."""

    name: str
    steps: int = 1


@dataclass
class PlayerBinding:
    """Assigns chat users to board sides on their first move.

    A slot is filled exactly once; afterwards only the bound user may move
    for that side.
    """

    slots: Dict[int, Player] = field(default_factory=dict)

    def check(self, side: int, user_id: int) -> None:
        player = self.slots.get(side)
        if player is None or player.user_id == user_id:
            return
        if self.side_of(user_id) is not None:
            raise NotYourTurn()
        raise WrongPlayer()

    def bind_or_check(self, side: int, user_id: int, name: str = "") -> Player:
        self.check(side, user_id)
        player = self.slots.get(side)
        if player is None:
            player = Player(user_id=user_id, name=name.strip())
            self.slots[side] = player
        return player

    def side_of(self, user_id: int) -> Optional[int]:
        for side, player in self.slots.items():
            if player.user_id == user_id:
                return side
        return None

    def name_of(self, side: int) -> Optional[str]:
        player = self.slots.get(side)
        return player.name if player else None


@dataclass
class RenderModel:
    """Snapshot of a session taken under the store lock for rendering."""

    variant: str
    grid: List[List[str]]
    outcome: Outcome = Outcome.ONGOING
    turn: Optional[int] = None
    winner: Optional[int] = None
    players: Dict[int, str] = field(default_factory=dict)
    symbols: Dict[int, str] = field(default_factory=dict)
    scores: Dict[int, int] = field(default_factory=dict)
    participants: List[Participant] = field(default_factory=list)
    elapsed: Optional[float] = None
    trigger: Optional[str] = None

    @property
    def finished(self) -> bool:
        return self.outcome.terminal


@dataclass
class MoveResult:
    model: RenderModel
    side: Optional[int] = None

    @property
    def outcome(self) -> Outcome:
        return self.model.outcome

    @property
    def finished(self) -> bool:
        return self.model.finished
