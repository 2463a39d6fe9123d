from __future__ import annotations
import asyncio
import logging
from telegram import Update
from telegram.ext import ContextTypes

from errors import MoveError, SessionNotFound
from handlers.keyboard import board_keyboard
from logic.parser import ARITY, parse_callback
from logic.render import render_info


logger = logging.getLogger(__name__)

GAME_NOT_FOUND = 'Game not found'

CALLBACK_PATTERN = '^(?:' + '|'.join(ARITY) + ')-'


async def game_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Apply a board button press and redraw the game message.

    The move is applied with the session lock held; the edit and the
    callback answer are sent after it is released and run concurrently.
    """
    query = update.callback_query
    payload = parse_callback(query.data)
    message = query.message
    if payload is None or message is None:
        logger.info('Ignoring callback %r', query.data)
        await query.answer()
        return

    engine = context.bot_data['engines'][payload.variant]
    key = (message.chat.id, payload.message_id)
    user = query.from_user
    try:
        result = engine.apply_move(key, user.id, user.full_name, *payload.coords)
    except SessionNotFound:
        logger.info('No %s session for %s', payload.variant, key)
        await query.answer(GAME_NOT_FOUND, show_alert=True)
        return
    except MoveError as exc:
        logger.info(
            'Rejected %s move %s by user_id=%s: %s',
            payload.variant,
            payload.coords,
            user.id,
            exc,
        )
        if exc.alert:
            await query.answer(str(exc), show_alert=True)
        else:
            await query.answer()
        return

    model = result.model
    await asyncio.gather(
        query.edit_message_text(
            render_info(model),
            reply_markup=board_keyboard(model, payload.message_id),
        ),
        query.answer(),
    )
