from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

# Callback payloads look like ``tictactoe-<message id>-<row>-<col>`` or
# ``connectfour-<message id>-<col>``.  The message id is the id of the command
# message that started the game, so together with the chat id of the callback
# it forms the session key without walking reply chains.
SEPARATOR = "-"

ARITY = {
    "tictactoe": 2,
    "reversi": 2,
    "connectfour": 1,
    "minesweeper": 2,
}

MINESWEEPER_DEFAULT = (8, 8, 9)
MINESWEEPER_MAX_SIDE = 8


@dataclass(frozen=True)
class CallbackData:
    variant: str
    message_id: int
    coords: Tuple[int, ...]


def encode_callback(variant: str, message_id: int, *coords: int) -> str:
    return SEPARATOR.join([variant, str(message_id), *(str(c) for c in coords)])


def _parse_index(value: str) -> Optional[int]:
    value = value.strip()
    if not value.isdecimal():
        return None
    return int(value)


def parse_callback(data: Optional[str]) -> Optional[CallbackData]:
    """Parse a button payload; ``None`` for anything that is not a move."""
    if not data:
        return None
    variant, *rest = data.split(SEPARATOR)
    arity = ARITY.get(variant)
    if arity is None or len(rest) != arity + 1:
        return None
    numbers = [_parse_index(part) for part in rest]
    if any(n is None for n in numbers):
        return None
    message_id, *coords = numbers
    return CallbackData(variant=variant, message_id=message_id, coords=tuple(coords))


def parse_minesweeper_args(
    args: Iterable[str],
    mention: str = "",
) -> Optional[Tuple[int, int, int]]:
    """Parse ``/minesweeper [height width mines]``.

    Arguments containing the bot ``mention`` are ignored so that
    ``/minesweeper @bot 5 5 4`` works in groups.
    """
    values = [arg for arg in args if not (mention and mention in arg)]
    if not values:
        return MINESWEEPER_DEFAULT
    if len(values) != 3:
        return None
    numbers = [_parse_index(v) for v in values]
    if any(n is None for n in numbers):
        return None
    height, width, mines = numbers
    if not (1 <= height <= MINESWEEPER_MAX_SIDE and 1 <= width <= MINESWEEPER_MAX_SIDE):
        return None
    if mines >= height * width:
        return None
    return height, width, mines
