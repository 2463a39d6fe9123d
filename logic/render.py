from __future__ import annotations
from typing import List, Optional

from models import Outcome, RenderModel

TITLES = {
    "tictactoe": "Tic-Tac-Toe",
    "reversi": "Reversi",
    "connectfour": "Connect Four",
    "minesweeper": "Minesweeper",
}


def format_duration(seconds: Optional[float]) -> str:
    total = int(seconds or 0)
    minutes, secs = divmod(total, 60)
    return f"{minutes} min {secs} s"


def _side_label(model: RenderModel, side: Optional[int]) -> str:
    symbol = model.symbols.get(side, "?")
    name = model.players.get(side)
    return f"{symbol} {name}" if name else symbol


def _player_lines(model: RenderModel) -> List[str]:
    lines = []
    for side in sorted(model.symbols):
        name = model.players.get(side)
        if name:
            lines.append(f"{model.symbols[side]}: {name}")
    return lines


def _participant_lines(model: RenderModel) -> List[str]:
    lines = []
    for participant in model.participants:
        noun = "move" if participant.steps == 1 else "moves"
        lines.append(f"{participant.name}: {participant.steps} {noun}")
    return lines


def _score_line(model: RenderModel) -> Optional[str]:
    if not model.scores:
        return None
    return " ".join(
        f"{model.symbols.get(side, side)} {count}"
        for side, count in sorted(model.scores.items())
    )


def render_info(model: RenderModel) -> str:
    """Status text shown above the game keyboard."""
    lines = [TITLES.get(model.variant, model.variant), ""]
    lines.extend(_player_lines(model))
    lines.extend(_participant_lines(model))
    lines.append("")

    scores = _score_line(model)
    if scores:
        lines.append(scores)

    outcome = model.outcome
    if outcome is Outcome.ONGOING:
        if model.turn is not None:
            lines.append(f"Turn: {model.symbols.get(model.turn, model.turn)}")
    elif outcome is Outcome.WIN:
        lines.append(f"{_side_label(model, model.winner)} wins!")
    elif outcome is Outcome.DRAW:
        lines.append("Draw")
    elif outcome is Outcome.SUCCEEDED:
        lines.append(f"Time: {format_duration(model.elapsed)}")
        lines.append("All mines cleared!")
    elif outcome is Outcome.FAILED:
        lines.append(f"Time: {format_duration(model.elapsed)}")
        lines.append(f"{model.trigger or 'Someone'} stepped on a mine")
    return "\n".join(lines).strip()
