"""Per-variant entry points used by the chat handlers.

``GameEngine`` ties a board factory to a :class:`storage.SessionStore`.  A move
is validated, applied and rendered inside one critical section of the store,
so two users racing for the same side or cell are serialised and the loser
sees the board as the winner left it.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Hashable, Optional

from errors import NotYourTurn
from models import MoveResult, Outcome, Participant, RenderModel
from storage import Session, SessionStore
from logic.board import Board
from logic.connectfour import ConnectFour
from logic.minesweeper import Minesweeper
from logic.othello import Othello
from logic.tictactoe import TicTacToe

logger = logging.getLogger(__name__)

BoardFactory = Callable[..., Board]

VARIANTS: Dict[str, BoardFactory] = {
    TicTacToe.variant: TicTacToe,
    Othello.variant: Othello,
    ConnectFour.variant: ConnectFour,
    Minesweeper.variant: Minesweeper,
}


def snapshot(session: Session, now: Optional[float] = None) -> RenderModel:
    """Copy everything needed to draw ``session``; call with the lock held."""
    board = session.board
    elapsed = None
    if session.started_at is not None:
        elapsed = (time.monotonic() if now is None else now) - session.started_at
    return RenderModel(
        variant=board.variant,
        grid=board.render(),
        outcome=board.outcome,
        turn=board.turn,
        winner=board.winner,
        players={side: player.name for side, player in session.binding.slots.items()},
        symbols=dict(board.symbols),
        scores=board.scores(),
        participants=[
            Participant(name=p.name, steps=p.steps) for p in session.participants.values()
        ],
        elapsed=elapsed,
        trigger=session.trigger,
    )


class GameEngine:
    def __init__(
        self,
        variant: str,
        factory: BoardFactory,
        store: Optional[SessionStore] = None,
    ) -> None:
        self.variant = variant
        self.factory = factory
        self.store = store if store is not None else SessionStore(variant)

    def start_session(self, key: Hashable, **params: Any) -> RenderModel:
        """Create the session for ``key`` (or reuse it) and return its first render.

        Board construction errors such as :class:`errors.InvalidBoard`
        propagate before anything is stored.
        """
        session = self.store.get_or_create(key, lambda: self.factory(**params))
        return self.store.with_session(session.key, snapshot)

    def apply_move(
        self,
        key: Hashable,
        user_id: int,
        name: str,
        *move_args: int,
        role_hint: Optional[int] = None,
    ) -> MoveResult:
        def mutate(session: Session) -> MoveResult:
            board = session.board
            side = board.turn
            if board.cooperative:
                board.apply_move(None, *move_args)
                self._record_participant(session, user_id, name)
            else:
                if role_hint is not None and role_hint != side:
                    raise NotYourTurn()
                session.binding.check(side, user_id)
                board.apply_move(side, *move_args)
                session.binding.bind_or_check(side, user_id, name)

            if board.finished:
                if board.outcome is Outcome.FAILED:
                    session.trigger = name
                self.store.discard(key)
                logger.info("%s session %s finished: %s", self.variant, key, board.outcome.value)
            return MoveResult(model=snapshot(session), side=side)

        return self.store.with_session(key, mutate)

    def _record_participant(self, session: Session, user_id: int, name: str) -> None:
        if session.started_at is None:
            session.started_at = time.monotonic()
        participant = session.participants.get(user_id)
        if participant is None:
            session.participants[user_id] = Participant(name=name.strip())
        else:
            participant.steps += 1


def build_engines(stores: Optional[Dict[str, SessionStore]] = None) -> Dict[str, GameEngine]:
    stores = stores or {}
    return {
        variant: GameEngine(variant, factory, stores.get(variant))
        for variant, factory in VARIANTS.items()
    }
