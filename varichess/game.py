"""Game setup and self-play."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .board import PAWN_ORIENTATION, Board, Square
from .engine import Engine
from .notation import move_to_notation
from .pieces import Color, PawnStatus, Piece, PieceType

logger = logging.getLogger(__name__)

BACK_RANK = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

CHECKMATE = "checkmate"
STALEMATE = "stalemate"
TURN_LIMIT = "turn_limit"


def standard_board() -> Board:
    """The standard 8x8 starting position, Black on top."""
    width = height = 8
    squares: List[Square] = [None] * (width * height)
    for x, kind in enumerate(BACK_RANK):
        squares[x] = Piece(Color.BLACK, kind)
        squares[x + 7 * width] = Piece(Color.WHITE, kind)
        squares[x + width] = Piece.pawn(
            Color.BLACK, PAWN_ORIENTATION[Color.BLACK], PawnStatus.CAN_LEAP
        )
        squares[x + 6 * width] = Piece.pawn(
            Color.WHITE, PAWN_ORIENTATION[Color.WHITE], PawnStatus.CAN_LEAP
        )
    return Board(width, height, squares)


def invert_color(board: Board) -> Board:
    """Swap the color of every piece, leaving everything else in place."""
    squares = [
        None if piece is None
        else Piece(piece.color.next(), piece.kind, piece.orientation, piece.status)
        for piece in board.squares
    ]
    return Board(board.width, board.height, squares)


def outcome(board: Board, color: Color) -> Optional[str]:
    """Checkmate or stalemate if ``color`` has no legal move, otherwise None."""
    if board.moves(color, check_legality=True):
        return None
    return CHECKMATE if board.is_in_check(color) else STALEMATE


@dataclass
class GameRecord:
    """Result of a self-played game."""

    moves: List[str] = field(default_factory=list)
    board: Optional[Board] = None
    side_to_move: Optional[Color] = None
    termination: Optional[str] = None

    def __str__(self) -> str:
        return " ".join(self.moves)


def auto_play(
    board: Board,
    starting_player: Color,
    depth: int,
    max_turns: int = 100,
    engine: Optional[Engine] = None,
) -> GameRecord:
    """Let the engine play both sides until no move is left or ``max_turns`` elapse."""
    engine = engine or Engine(depth=depth)
    record = GameRecord()
    player = starting_player

    for _ in range(max_turns):
        move = engine.search(board, player)
        if move is None:
            record.termination = outcome(board, player)
            logger.info("no more valid moves for %s: %s", player.value, record.termination)
            break
        pos, actions = move
        record.moves.append(move_to_notation(pos, actions, board.height))
        board = board.play(player, pos, actions)
        player = player.next()
    else:
        record.termination = TURN_LIMIT
        logger.info("game stopped after %d turns", max_turns)

    record.board = board
    record.side_to_move = player
    return record
