import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock

from telegram import InlineKeyboardMarkup

from handlers import router
from logic.engine import build_engines
from logic.minesweeper import Minesweeper


CHAT_ID = 5
MESSAGE_ID = 42


def make_update(data, user_id=1, name='Alice'):
    query = SimpleNamespace(
        data=data,
        message=SimpleNamespace(chat=SimpleNamespace(id=CHAT_ID)),
        from_user=SimpleNamespace(id=user_id, full_name=name),
        answer=AsyncMock(),
        edit_message_text=AsyncMock(),
    )
    return SimpleNamespace(callback_query=query), query


def make_context(engines=None):
    return SimpleNamespace(bot_data={'engines': engines or build_engines()})


def test_accepted_move_edits_board_and_answers():
    async def run_test():
        context = make_context()
        context.bot_data['engines']['tictactoe'].start_session((CHAT_ID, MESSAGE_ID))
        update, query = make_update(f'tictactoe-{MESSAGE_ID}-1-1')

        await router.game_callback(update, context)

        query.answer.assert_awaited_once_with()
        query.edit_message_text.assert_awaited_once()
        args = query.edit_message_text.await_args
        assert '❌: Alice' in args.args[0]
        markup = args.kwargs['reply_markup']
        assert isinstance(markup, InlineKeyboardMarkup)
        assert markup.inline_keyboard[1][1].text == '❌'

    asyncio.run(run_test())


def test_unknown_session_alerts_game_not_found():
    async def run_test():
        update, query = make_update('reversi-99-2-3')

        await router.game_callback(update, make_context())

        query.answer.assert_awaited_once_with('Game not found', show_alert=True)
        query.edit_message_text.assert_not_awaited()

    asyncio.run(run_test())


def test_rejected_move_alerts_without_editing():
    async def run_test():
        context = make_context()
        context.bot_data['engines']['tictactoe'].start_session((CHAT_ID, MESSAGE_ID))
        first, _ = make_update(f'tictactoe-{MESSAGE_ID}-0-0', user_id=1)
        await router.game_callback(first, context)

        update, query = make_update(f'tictactoe-{MESSAGE_ID}-0-0', user_id=2, name='Bob')
        await router.game_callback(update, context)

        query.answer.assert_awaited_once_with('This cell is already taken', show_alert=True)
        query.edit_message_text.assert_not_awaited()

        second, _ = make_update(f'tictactoe-{MESSAGE_ID}-1-1', user_id=2, name='Bob')
        await router.game_callback(second, context)
        update, query = make_update(f'tictactoe-{MESSAGE_ID}-2-2', user_id=3, name='Carol')
        await router.game_callback(update, context)
        query.answer.assert_awaited_once_with(
            'This side is already taken by another player', show_alert=True
        )

    asyncio.run(run_test())


def test_silent_rejection_answers_without_text():
    async def run_test():
        engines = build_engines()
        engines['minesweeper'].factory = lambda: Minesweeper.from_mines(3, 3, [(0, 0), (0, 2)])
        engines['minesweeper'].start_session((CHAT_ID, MESSAGE_ID))
        context = make_context(engines)
        await router.game_callback(make_update(f'minesweeper-{MESSAGE_ID}-2-0')[0], context)

        update, query = make_update(f'minesweeper-{MESSAGE_ID}-2-1')
        await router.game_callback(update, context)

        query.answer.assert_awaited_once_with()
        query.edit_message_text.assert_not_awaited()

    asyncio.run(run_test())


def test_malformed_payload_is_acknowledged():
    async def run_test():
        update, query = make_update('tictactoe-oops')

        await router.game_callback(update, make_context())

        query.answer.assert_awaited_once_with()
        query.edit_message_text.assert_not_awaited()

    asyncio.run(run_test())


def test_clicks_after_game_end_report_missing_game():
    async def run_test():
        context = make_context()
        context.bot_data['engines']['connectfour'].start_session((CHAT_ID, MESSAGE_ID))
        for user_id, col in [(1, 0), (2, 1), (1, 0), (2, 1), (1, 0), (2, 1), (1, 0)]:
            update, query = make_update(f'connectfour-{MESSAGE_ID}-{col}', user_id=user_id)
            await router.game_callback(update, context)
        assert 'wins!' in query.edit_message_text.await_args.args[0]

        update, query = make_update(f'connectfour-{MESSAGE_ID}-2', user_id=2)
        await router.game_callback(update, context)
        query.answer.assert_awaited_once_with('Game not found', show_alert=True)

    asyncio.run(run_test())
