"""Variant chess rules engine and search AI."""

from .position import Position, LOS, DIAGONALS, ORTHOGONALS
from .pieces import (
    Color, PieceType, PawnStatus, Piece,
    Action, Go, Take, Promotion, OFF_BOARD,
    moves_for,
)
from .board import Board, Candidate, PAWN_ORIENTATION
from .evaluation import (
    MaterialEvaluator, PIECE_VALUES,
    evaluate, move_value, piece_value, position_value,
)
from .engine import Engine, minmax, random_move
from .notation import move_to_notation, parse_move
from .game import (
    GameRecord, auto_play, invert_color, outcome, standard_board,
    CHECKMATE, STALEMATE, TURN_LIMIT,
)

__version__ = "0.1.0"

__all__ = [
    # Coordinates
    'Position', 'LOS', 'DIAGONALS', 'ORTHOGONALS',
    # Pieces and actions
    'Color', 'PieceType', 'PawnStatus', 'Piece',
    'Action', 'Go', 'Take', 'Promotion', 'OFF_BOARD',
    'moves_for',
    # Board
    'Board', 'Candidate', 'PAWN_ORIENTATION',
    # Evaluation
    'MaterialEvaluator', 'PIECE_VALUES',
    'evaluate', 'move_value', 'piece_value', 'position_value',
    # Search
    'Engine', 'minmax', 'random_move',
    # Notation
    'move_to_notation', 'parse_move',
    # Game
    'GameRecord', 'auto_play', 'invert_color', 'outcome', 'standard_board',
    'CHECKMATE', 'STALEMATE', 'TURN_LIMIT',
]
