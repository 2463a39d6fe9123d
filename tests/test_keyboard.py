from handlers.keyboard import board_keyboard, menu_keyboard
from logic.engine import build_engines


def test_grid_keyboard_mirrors_board():
    engine = build_engines()['tictactoe']
    model = engine.start_session((1, 42))
    markup = board_keyboard(model, 42)
    rows = markup.inline_keyboard
    assert len(rows) == 3
    assert all(len(row) == 3 for row in rows)
    assert rows[1][2].callback_data == 'tictactoe-42-1-2'
    assert rows[0][0].text == '➕'


def test_connectfour_buttons_drop_into_column():
    engine = build_engines()['connectfour']
    model = engine.start_session((1, 42))
    rows = board_keyboard(model, 42).inline_keyboard
    assert len(rows) == 6
    assert all(len(row) == 7 for row in rows)
    assert {row[3].callback_data for row in rows} == {'connectfour-42-3'}


def test_minesweeper_keyboard_uses_requested_size():
    engine = build_engines()['minesweeper']
    model = engine.start_session((1, 42), height=5, width=6, mines=4)
    rows = board_keyboard(model, 42).inline_keyboard
    assert len(rows) == 5
    assert all(len(row) == 6 for row in rows)


def test_menu_lists_every_game():
    data = [row[0].callback_data for row in menu_keyboard().inline_keyboard]
    assert data == ['play_tictactoe', 'play_reversi', 'play_connectfour', 'play_minesweeper']
