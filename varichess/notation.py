"""Move notation."""

from typing import Sequence

from .board import Board, Candidate
from .pieces import Action, Color, Go, Promotion
from .position import Position


def move_to_notation(origin: Position, actions: Sequence[Action], height: int = 8) -> str:
    """Render a move as coordinate notation, e.g. "e2e4" or "e7e8=Q".

    Every Go contributes its from and to squares; captures made with Take
    (en passant) are implied by the Go.
    """
    parts = []
    current = origin
    for action in actions:
        if isinstance(action, Go):
            parts.append(current.to_square(height) + action.pos.to_square(height))
            current = action.pos
        elif isinstance(action, Promotion):
            parts.append(f"={action.kind.value}")
    return "".join(parts)


def parse_move(board: Board, color: Color, text: str) -> Candidate:
    """Find the legal move of ``color`` written as ``text``.

    Raises:
        ValueError: If no legal move renders as ``text``.
    """
    wanted = text.strip()
    # Promotion letters are accepted in either case
    if "=" in wanted:
        head, _, letter = wanted.rpartition("=")
        wanted = f"{head}={letter.upper()}"
    for pos, actions in board.candidates(color, check_legality=True):
        if move_to_notation(pos, actions, board.height) == wanted:
            return pos, actions
    raise ValueError(f"Illegal move for {color.value}: {text!r}")
