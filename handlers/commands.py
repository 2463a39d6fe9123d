from __future__ import annotations
from telegram import BotCommand, Message, Update
from telegram.constants import DiceEmoji
from telegram.ext import ContextTypes

import logging
from typing import Any, Dict

from errors import InvalidBoard
from handlers.keyboard import MENU_PREFIX, board_keyboard, menu_keyboard
from logic.engine import GameEngine
from logic.parser import MINESWEEPER_MAX_SIDE, parse_minesweeper_args
from logic.render import TITLES, render_info


logger = logging.getLogger(__name__)

GAME_COMMANDS = {
    'tictactoe': 'tictactoe',
    'reversi': 'reversi',
    'othello': 'reversi',
    'connectfour': 'connectfour',
    'minesweeper': 'minesweeper',
}

BOT_COMMANDS = [
    BotCommand('tictactoe', 'Start a Tic-Tac-Toe game'),
    BotCommand('reversi', 'Start a Reversi game'),
    BotCommand('connectfour', 'Start a Connect Four game'),
    BotCommand('minesweeper', 'Start Minesweeper: /minesweeper [height width mines]'),
    BotCommand('help', 'List available commands'),
    BotCommand('about', 'About this bot'),
]

NOVELTY_COMMANDS = {
    'dice': DiceEmoji.DICE,
    'dart': DiceEmoji.DARTS,
    'slot': DiceEmoji.SLOT_MACHINE,
}

WELCOME_TEXT = (
    'Board games for group chats. Pick a game below or send its command; '
    'anyone in the chat can take a side by making the first move for it.'
)

MINESWEEPER_USAGE = (
    'Usage: /minesweeper [height width mines]\n'
    f'Height and width go up to {MINESWEEPER_MAX_SIDE}, '
    'and there must be fewer mines than cells.'
)


def _engines(context: ContextTypes.DEFAULT_TYPE) -> Dict[str, GameEngine]:
    return context.bot_data['engines']


def _command_name(message: Message) -> str:
    text = (message.text or '').split()
    if not text:
        return ''
    return text[0].lstrip('/').split('@')[0].lower()


async def _mention(context: ContextTypes.DEFAULT_TYPE) -> str:
    identity = context.bot_data.get('identity')
    if identity is None:
        return ''
    return await identity.mention(context.bot)


async def start_game(
    message: Message,
    context: ContextTypes.DEFAULT_TYPE,
    variant: str,
    **params: Any,
) -> None:
    """Open a session keyed by ``message`` and answer it with the board.

    The store lock is released before the reply is sent.  If sending fails
    the session is dropped so that no unreachable board lingers until the
    collector runs.
    """
    engine = _engines(context)[variant]
    key = (message.chat_id, message.message_id)
    model = engine.start_session(key, **params)
    logger.info('Started %s session %s', variant, key)
    try:
        await message.reply_text(
            render_info(model),
            reply_markup=board_keyboard(model, message.message_id),
            do_quote=True,
        )
    except Exception:
        engine.store.discard(key)
        logger.exception('Failed to send %s board for %s', variant, key)
        raise


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    logger.info(
        '/start called: user_id=%s chat_id=%s',
        update.effective_user.id if update.effective_user else None,
        update.effective_chat.id if update.effective_chat else None,
    )
    await update.message.reply_text(WELCOME_TEXT, reply_markup=menu_keyboard())


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    lines = [f'/{command.command} - {command.description}' for command in BOT_COMMANDS]
    lines.insert(2, '/othello - Same as /reversi')
    await update.message.reply_text('\n'.join(lines))


async def about(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    mention = await _mention(context)
    games = ', '.join(TITLES.values())
    await update.message.reply_text(
        f'{mention or "This bot"} hosts {games} right in the chat.'
    )


async def choose_game(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle game selection from the start menu."""
    query = update.callback_query
    await query.answer()
    variant = query.data[len(MENU_PREFIX):]
    if variant not in TITLES:
        return
    if variant == 'minesweeper':
        await query.message.reply_text(f'Use /minesweeper to play.\n{MINESWEEPER_USAGE}')
    else:
        await query.message.reply_text(f'Use /{variant} to start {TITLES[variant]}.')


async def game_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle ``/tictactoe``, ``/reversi``, ``/othello`` and ``/connectfour``."""
    message = update.message
    command = _command_name(message)
    variant = GAME_COMMANDS.get(command)
    logger.info(
        '/%s called: user_id=%s chat_id=%s',
        command,
        update.effective_user.id if update.effective_user else None,
        message.chat_id,
    )
    if variant is None:
        return
    await start_game(message, context, variant)


async def minesweeper(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    message = update.message
    args = getattr(context, 'args', None) or []
    logger.info('/minesweeper called: chat_id=%s args=%s', message.chat_id, args)
    mention = await _mention(context)
    params = parse_minesweeper_args(args, mention)
    if params is None:
        await message.reply_text(MINESWEEPER_USAGE)
        return
    height, width, mines = params
    try:
        await start_game(message, context, 'minesweeper', height=height, width=width, mines=mines)
    except InvalidBoard as exc:
        await message.reply_text(f'{exc}\n{MINESWEEPER_USAGE}')


async def novelty(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Send the animated dice matching ``/dice``, ``/dart`` or ``/slot``."""
    message = update.message
    command = _command_name(message)
    emoji = NOVELTY_COMMANDS.get(command)
    if emoji is None:
        return
    await message.reply_dice(emoji=emoji)
