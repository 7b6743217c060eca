"""Static evaluation and move-value heuristic."""

from functools import lru_cache
from typing import Sequence, Tuple

import numpy as np

from .board import Board
from .pieces import Action, Color, Go, PieceType, Promotion, Take
from .position import Position

PIECE_VALUES = {
    PieceType.PAWN: 1.0,
    PieceType.KNIGHT: 3.0,
    PieceType.BISHOP: 3.5,
    PieceType.ROOK: 5.0,
    PieceType.QUEEN: 9.0,
    PieceType.KING: 1000.0,  # stands in for mate detection
}


def piece_value(kind: PieceType) -> float:
    return PIECE_VALUES[kind]


def axis_values(length: int) -> np.ndarray:
    """Score every coordinate of one axis: 0.5 at the center, 0 at the edges."""
    if length == 1:
        return np.full(1, 0.5)
    coords = np.arange(length, dtype=np.float64)
    return 0.5 - np.abs(coords / (length - 1) - 0.5)


@lru_cache(maxsize=None)
def centrality_table(width: int, height: int) -> Tuple[float, ...]:
    """Positional bonus of every square, in board index order."""
    table = np.outer(axis_values(height), axis_values(width))
    return tuple(table.ravel().tolist())


def position_value(board: Board, pos: Position) -> float:
    return centrality_table(board.width, board.height)[board.index(pos)]


def move_value(board: Board, origin: Position, actions: Sequence[Action]) -> float:
    """Material swing of a move, assuming the mover is lost if it wins anything.

    Used to order moves and to drop unsafe ones on the last ply.
    """
    mover = board.get(origin)
    value = 0.0
    for action in actions:
        if isinstance(action, (Go, Take)):
            target = board.get(action.pos)
            if target is not None:
                sign = -1.0 if target.color == mover.color else 1.0
                value += piece_value(target.kind) * sign
        elif isinstance(action, Promotion):
            value += piece_value(action.kind)
    if value > 0:
        value -= piece_value(mover.kind)
    return value


class MaterialEvaluator:
    """Material plus centrality evaluator."""

    def evaluate(self, board: Board, perspective: Color) -> float:
        """Score ``board`` from ``perspective``'s point of view."""
        bonus = centrality_table(board.width, board.height)
        score = 0.0
        for i, piece in enumerate(board.squares):
            if piece is None:
                continue
            value = PIECE_VALUES[piece.kind] + bonus[i]
            if piece.color == perspective:
                score += value
            else:
                score -= value
        return score


def evaluate(board: Board, perspective: Color) -> float:
    return MaterialEvaluator().evaluate(board, perspective)
