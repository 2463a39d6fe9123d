import pytest

from errors import InvalidBoard, NotYourTurn, OutOfBounds, SessionNotFound, WrongPlayer
from logic.engine import VARIANTS, GameEngine, build_engines
from logic.minesweeper import Minesweeper
from logic.tictactoe import CROSS, NOUGHT, TicTacToe
from models import Outcome


KEY = (10, 20)


def test_build_engines_covers_every_variant():
    engines = build_engines()
    assert set(engines) == set(VARIANTS) == {'tictactoe', 'reversi', 'connectfour', 'minesweeper'}
    assert all(engine.store.name == variant for variant, engine in engines.items())


def test_start_session_is_idempotent():
    engine = GameEngine('tictactoe', TicTacToe)
    model = engine.start_session(KEY)
    assert model.variant == 'tictactoe'
    assert model.turn == CROSS
    assert len(model.grid) == 3
    engine.apply_move(KEY, 1, 'Alice', 0, 0)
    again = engine.start_session(KEY)
    assert again.grid[0][0] == '❌'
    assert len(engine.store) == 1


def test_players_are_bound_on_first_move():
    engine = GameEngine('tictactoe', TicTacToe)
    engine.start_session(KEY)

    result = engine.apply_move(KEY, 1, 'Alice', 0, 0)
    assert result.side == CROSS
    assert result.model.players == {CROSS: 'Alice'}

    result = engine.apply_move(KEY, 2, 'Bob', 1, 1)
    assert result.side == NOUGHT
    assert result.model.players == {CROSS: 'Alice', NOUGHT: 'Bob'}

    with pytest.raises(NotYourTurn):
        engine.apply_move(KEY, 2, 'Bob', 2, 2)
    with pytest.raises(WrongPlayer):
        engine.apply_move(KEY, 3, 'Carol', 2, 2)

    session = engine.store.get(KEY)
    assert len(session.board.history) == 2
    engine.apply_move(KEY, 1, 'Alice', 2, 2)


def test_rejected_move_does_not_bind():
    engine = GameEngine('tictactoe', TicTacToe)
    engine.start_session(KEY)
    with pytest.raises(OutOfBounds):
        engine.apply_move(KEY, 1, 'Alice', 5, 5)
    assert engine.store.get(KEY).binding.slots == {}


def test_role_hint_must_match_turn():
    engine = GameEngine('tictactoe', TicTacToe)
    engine.start_session(KEY)
    with pytest.raises(NotYourTurn):
        engine.apply_move(KEY, 1, 'Alice', 0, 0, role_hint=NOUGHT)
    result = engine.apply_move(KEY, 1, 'Alice', 0, 0, role_hint=CROSS)
    assert result.side == CROSS


def test_finished_game_is_removed():
    engine = GameEngine('tictactoe', TicTacToe)
    engine.start_session(KEY)
    moves = [(1, 0, 0), (2, 1, 0), (1, 0, 1), (2, 1, 1)]
    for user_id, row, col in moves:
        engine.apply_move(KEY, user_id, f'user{user_id}', row, col)
    result = engine.apply_move(KEY, 1, 'user1', 0, 2)
    assert result.finished
    assert result.outcome is Outcome.WIN
    assert result.model.winner == CROSS
    assert KEY not in engine.store
    with pytest.raises(SessionNotFound):
        engine.apply_move(KEY, 2, 'user2', 2, 2)


def test_minesweeper_records_participants_and_trigger():
    engine = GameEngine('minesweeper', lambda: Minesweeper.from_mines(3, 3, [(1, 1)]))
    engine.start_session(KEY)

    result = engine.apply_move(KEY, 1, 'Alice', 0, 0)
    assert [(p.name, p.steps) for p in result.model.participants] == [('Alice', 1)]
    assert result.model.elapsed is not None
    assert result.side is None

    engine.apply_move(KEY, 1, 'Alice', 0, 1)
    result = engine.apply_move(KEY, 2, 'Bob', 1, 1)
    assert result.outcome is Outcome.FAILED
    assert result.model.trigger == 'Bob'
    assert [(p.name, p.steps) for p in result.model.participants] == [('Alice', 2), ('Bob', 1)]
    assert len(engine.store) == 0


def test_invalid_board_is_not_stored():
    engine = build_engines()['minesweeper']
    with pytest.raises(InvalidBoard):
        engine.start_session(KEY, height=2, width=2, mines=4)
    assert len(engine.store) == 0
