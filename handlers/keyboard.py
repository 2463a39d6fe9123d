from __future__ import annotations

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from logic.parser import ARITY, encode_callback
from logic.render import TITLES
from models import RenderModel

MENU_PREFIX = 'play_'


def board_keyboard(model: RenderModel, message_id: int) -> InlineKeyboardMarkup:
    """Return the inline keyboard mirroring ``model.grid``.

    Every button carries ``<variant>-<message_id>-<row>-<col>``; Connect Four
    buttons carry only the column since a move is a column drop.
    """
    by_column = ARITY[model.variant] == 1
    keyboard: list[list[InlineKeyboardButton]] = []
    for r, cells in enumerate(model.grid):
        row: list[InlineKeyboardButton] = []
        for c, label in enumerate(cells):
            coords = (c,) if by_column else (r, c)
            row.append(
                InlineKeyboardButton(
                    label,
                    callback_data=encode_callback(model.variant, message_id, *coords),
                )
            )
        keyboard.append(row)
    return InlineKeyboardMarkup(keyboard)


def menu_keyboard() -> InlineKeyboardMarkup:
    """Game picker shown by ``/start``."""
    return InlineKeyboardMarkup(
        [
            [InlineKeyboardButton(title, callback_data=f'{MENU_PREFIX}{variant}')]
            for variant, title in TITLES.items()
        ]
    )
