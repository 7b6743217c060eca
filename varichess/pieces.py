"""Pieces, move actions and per-piece move generation."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, TYPE_CHECKING, Union

from .position import DIAGONALS, LOS, ORTHOGONALS, Position

if TYPE_CHECKING:
    from .board import Board


class Color(Enum):
    """Player colors."""

    WHITE = "white"
    BLACK = "black"

    def next(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE


class PieceType(Enum):
    """Piece types, valued by their notation letter."""

    PAWN = "P"
    KNIGHT = "N"
    BISHOP = "B"
    ROOK = "R"
    QUEEN = "Q"
    KING = "K"


class PawnStatus(Enum):
    """Double-step eligibility of a pawn."""

    CAN_LEAP = "CAN_LEAP"
    JUST_LEAPED = "JUST_LEAPED"  # en passant window, lasts one ply
    CANNOT_LEAP = "CANNOT_LEAP"


@dataclass(frozen=True)
class Piece:
    """A piece on the board.

    Pawns carry their forward direction and leap status; both stay None for
    every other kind.
    """

    color: Color
    kind: PieceType
    orientation: Optional[Position] = None
    status: Optional[PawnStatus] = None

    @classmethod
    def pawn(cls, color: Color, orientation: Position, status: PawnStatus) -> "Piece":
        return cls(color, PieceType.PAWN, orientation, status)

    @property
    def symbol(self) -> str:
        """Board letter: upper case for White, lower case for Black."""
        letter = self.kind.value
        return letter if self.color is Color.WHITE else letter.lower()

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class Go:
    """Move the mover to ``pos``, capturing whatever stands there."""

    pos: Position


@dataclass(frozen=True)
class Take:
    """Remove the occupant of ``pos`` without moving the mover."""

    pos: Position


@dataclass(frozen=True)
class Promotion:
    """Turn the mover into ``kind`` where it stands."""

    kind: PieceType


Action = Union[Go, Take, Promotion]


class _OffBoard:
    """Result of looking up a square outside the board."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "OFF_BOARD"


OFF_BOARD = _OffBoard()

KNIGHT_JUMPS = (
    Position(-2, -1), Position(-1, -2),
    Position(-2, 1), Position(1, -2),
    Position(2, -1), Position(-1, 2),
    Position(2, 1), Position(1, 2),
)

KING_STEPS = (
    Position(-1, -1), Position(-1, 0), Position(-1, 1),
    Position(0, -1), Position(0, 1),
    Position(1, -1), Position(1, 0), Position(1, 1),
)

# Bishop and rook promotions are not offered
PROMOTION_KINDS = (PieceType.QUEEN, PieceType.KNIGHT)


def moves_for(board: "Board", origin: Position, piece: Piece) -> List[List[Action]]:
    """Generate candidate action sequences for the piece standing on ``origin``."""
    if piece.kind == PieceType.PAWN:
        return pawn_moves(board, origin, piece.color, piece.orientation, piece.status)
    elif piece.kind == PieceType.KNIGHT:
        return step_moves(board, origin, piece.color, KNIGHT_JUMPS)
    elif piece.kind == PieceType.BISHOP:
        return slide_moves(board, origin, piece.color, DIAGONALS)
    elif piece.kind == PieceType.ROOK:
        return slide_moves(board, origin, piece.color, ORTHOGONALS)
    elif piece.kind == PieceType.QUEEN:
        return slide_moves(board, origin, piece.color, LOS)
    elif piece.kind == PieceType.KING:
        # No castling: pieces are placed, not developed from a fixed start
        return step_moves(board, origin, piece.color, KING_STEPS)
    raise ValueError(f"Unknown piece kind: {piece.kind}")


def pawn_moves(
    board: "Board",
    origin: Position,
    color: Color,
    orientation: Position,
    status: PawnStatus,
) -> List[List[Action]]:
    """Generate pawn moves.

    - One step forward onto an empty square
    - Two steps forward while the pawn can leap and both squares are empty
    - Diagonal capture of an opponent
    - En passant on an opponent pawn that leaped on the previous ply
    Every move that ends on the last rank is split into one move per
    promotion kind.
    """
    moves: List[List[Action]] = []

    forward = origin + orientation
    if board.get(forward) is None:
        moves.append([Go(forward)])
        leap = origin + orientation * 2
        if status == PawnStatus.CAN_LEAP and board.get(leap) is None:
            moves.append([Go(leap)])

    for offset in orientation.neighbors():
        diagonal = origin + offset
        target = board.get(diagonal)
        if target is OFF_BOARD:
            continue
        if target is not None:
            if target.color != color:
                moves.append([Go(diagonal)])
            continue
        # Empty diagonal: the passed pawn sits right beside us
        passed_pos = diagonal - orientation
        passed = board.get(passed_pos)
        if (
            isinstance(passed, Piece)
            and passed.color != color
            and passed.kind == PieceType.PAWN
            and passed.status == PawnStatus.JUST_LEAPED
        ):
            moves.append([Go(diagonal), Take(passed_pos)])

    return _expand_promotions(board, moves, orientation)


def _expand_promotions(
    board: "Board", moves: List[List[Action]], orientation: Position
) -> List[List[Action]]:
    expanded: List[List[Action]] = []
    for actions in moves:
        landing = actions[0].pos
        if board.get(landing + orientation) is OFF_BOARD:
            for kind in PROMOTION_KINDS:
                expanded.append(actions + [Promotion(kind)])
        else:
            expanded.append(actions)
    return expanded


def step_moves(
    board: "Board", origin: Position, color: Color, offsets: Sequence[Position]
) -> List[List[Action]]:
    """Single-step moves (knight, king): any on-board square not held by ``color``."""
    moves: List[List[Action]] = []
    for offset in offsets:
        target_pos = origin + offset
        target = board.get(target_pos)
        if target is OFF_BOARD:
            continue
        if target is not None and target.color == color:
            continue
        moves.append([Go(target_pos)])
    return moves


def slide_moves(
    board: "Board", origin: Position, color: Color, directions: Sequence[Position]
) -> List[List[Action]]:
    """Ray moves (bishop, rook, queen).

    Each ray runs over empty squares, ends on the first occupant (captured
    when it is an opponent) or at the edge of the board.
    """
    moves: List[List[Action]] = []
    for direction in directions:
        target_pos = origin + direction
        while True:
            target = board.get(target_pos)
            if target is OFF_BOARD:
                break
            if target is not None:
                if target.color != color:
                    moves.append([Go(target_pos)])
                break
            moves.append([Go(target_pos)])
            target_pos = target_pos + direction
    return moves
