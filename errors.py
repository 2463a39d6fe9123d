"""Exception hierarchy shared by the boards, the session store and handlers."""
from __future__ import annotations


class GameError(Exception):
    """Base class for every error raised by the game core."""


class MoveError(GameError):
    """A move was rejected; the board is left unchanged.

    ``alert`` tells the dispatcher whether the rejection should be shown to
    the user as a popup or acknowledged silently.
    """

    default_message = "Move rejected"
    alert = True

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidMove(MoveError):
    default_message = "You cannot move here"


class CellNotEmpty(InvalidMove):
    default_message = "This cell is already taken"


class ColumnFilled(InvalidMove):
    default_message = "This column is full"


class Unplaceable(InvalidMove):
    default_message = "You cannot place a piece here"


class OutOfBounds(InvalidMove):
    default_message = "This cell is outside the board"


class GameFinished(InvalidMove):
    default_message = "The game is already over"


class NothingToReveal(InvalidMove):
    default_message = "Nothing to open here"
    alert = False


class TurnError(MoveError):
    default_message = "Not your turn"


class NotYourTurn(TurnError):
    default_message = "Not your turn"


class WrongPlayer(TurnError):
    default_message = "This side is already taken by another player"


class SessionNotFound(GameError, KeyError):
    """No live session exists for the requested key."""

    def __init__(self, key: object) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Game not found: {self.key!r}"


class InvalidBoard(GameError, ValueError):
    """Board parameters are out of range."""


__all__ = [
    "GameError",
    "MoveError",
    "InvalidMove",
    "CellNotEmpty",
    "ColumnFilled",
    "Unplaceable",
    "OutOfBounds",
    "GameFinished",
    "NothingToReveal",
    "TurnError",
    "NotYourTurn",
    "WrongPlayer",
    "SessionNotFound",
    "InvalidBoard",
]
