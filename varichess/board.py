"""Board representation and move application."""

from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Set, Tuple, Union

from .pieces import (
    OFF_BOARD,
    Action,
    Color,
    Go,
    PawnStatus,
    Piece,
    PieceType,
    Promotion,
    Take,
    _OffBoard,
    moves_for,
)
from .position import Position, file_name

Square = Optional[Piece]
Candidate = Tuple[Position, List[Action]]

# Forward direction of each color's pawns: White plays up the board
PAWN_ORIENTATION = {
    Color.WHITE: Position(0, -1),
    Color.BLACK: Position(0, 1),
}


class Board:
    """Fixed-size rectangular board.

    A board never changes once built: ``play`` returns a new board, so
    search branches can share the parent without undo bookkeeping.
    """

    __slots__ = ("width", "height", "squares")

    def __init__(self, width: int, height: int, squares: Optional[Sequence[Square]] = None):
        """Initialize a board.

        Args:
            width: Number of files (x axis)
            height: Number of ranks (y axis)
            squares: Optional row-major occupants, ``x + y * width`` indexing.
                Defaults to an empty board.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid board size: {width}x{height}")
        if squares is None:
            squares = (None,) * (width * height)
        elif len(squares) != width * height:
            raise ValueError(
                f"Expected {width * height} squares, got {len(squares)}"
            )
        self.width = width
        self.height = height
        self.squares: Tuple[Square, ...] = tuple(squares)

    @classmethod
    def from_setup(cls, width: int, height: int, setup: Mapping[str, str]) -> "Board":
        """Build a board from square names mapped to piece letters.

        Upper case letters are White, lower case Black, e.g.
        ``{"e1": "K", "e8": "k", "d2": "P"}``. Pawns may leap only from
        their starting rank.
        """
        squares: List[Square] = [None] * (width * height)
        board = cls(width, height)
        for square, code in setup.items():
            pos = Position.from_square(square, height)
            if not board.in_bounds(pos):
                raise ValueError(f"Square {square} is outside a {width}x{height} board")
            squares[board.index(pos)] = _piece_from_code(code, pos, height)
        return cls(width, height, squares)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.squares == other.squares
        )

    def __hash__(self) -> int:
        return hash((self.width, self.height, self.squares))

    def __repr__(self) -> str:
        return f"Board({self.width}x{self.height})"

    def __str__(self) -> str:
        rows = []
        label_width = len(str(self.height))
        for y in range(self.height):
            cells = []
            for x in range(self.width):
                piece = self.squares[x + y * self.width]
                cells.append(piece.symbol if piece is not None else ".")
            rows.append(f"{self.height - y:>{label_width}} {' '.join(cells)}")
        rows.append(" " * (label_width + 1) + " ".join(file_name(x) for x in range(self.width)))
        return "\n".join(rows)

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def index(self, pos: Position) -> int:
        return pos.x + pos.y * self.width

    def pos(self, index: int) -> Position:
        return Position(index % self.width, index // self.width)

    def get(self, pos: Position) -> Union[Square, _OffBoard]:
        """Occupant of ``pos``: a Piece, None when empty, OFF_BOARD outside."""
        if not (0 <= pos.x < self.width and 0 <= pos.y < self.height):
            return OFF_BOARD
        return self.squares[pos.x + pos.y * self.width]

    def pieces(self, color: Optional[Color] = None) -> Iterator[Tuple[Position, Piece]]:
        """Iterate occupied squares in index order, optionally for one color."""
        for i, piece in enumerate(self.squares):
            if piece is not None and (color is None or piece.color == color):
                yield self.pos(i), piece

    def king_positions(self, color: Color) -> List[Position]:
        return [pos for pos, piece in self.pieces(color) if piece.kind == PieceType.KING]

    def moves(self, color: Color, check_legality: bool = False) -> Dict[Position, List[List[Action]]]:
        """Generate all candidate moves for ``color``, keyed by origin.

        With ``check_legality`` every candidate that leaves a king of
        ``color`` capturable by the opponent's next move is dropped. Origins
        with nothing to play are left out.
        """
        result: Dict[Position, List[List[Action]]] = {}
        for pos, piece in self.pieces(color):
            piece_moves = moves_for(self, pos, piece)
            if check_legality:
                piece_moves = [
                    actions
                    for actions in piece_moves
                    if not self.play(color, pos, actions).is_in_check(color)
                ]
            if piece_moves:
                result[pos] = piece_moves
        return result

    def candidates(self, color: Color, check_legality: bool = False) -> List[Candidate]:
        """Flatten ``moves`` into (origin, actions) pairs in generation order."""
        return [
            (pos, actions)
            for pos, piece_moves in self.moves(color, check_legality).items()
            for actions in piece_moves
        ]

    def attacked_positions(self, color: Color) -> Set[Position]:
        """Squares ``color`` could capture on with its next move."""
        attacked = set()
        for piece_moves in self.moves(color).values():
            for actions in piece_moves:
                for action in actions:
                    if isinstance(action, (Go, Take)):
                        attacked.add(action.pos)
        return attacked

    def is_in_check(self, color: Color) -> bool:
        """Check if any king of ``color`` can be captured by the opponent."""
        kings = self.king_positions(color)
        if not kings:
            return False
        attacked = self.attacked_positions(color.next())
        return any(king in attacked for king in kings)

    def play(self, color: Color, origin: Position, actions: Sequence[Action]) -> "Board":
        """Apply a move to a copy of the board and return the copy.

        Raises:
            ValueError: If ``origin`` does not hold a piece of ``color`` or an
                action points outside the board. Generated moves never do.
        """
        mover = self.get(origin)
        if not isinstance(mover, Piece) or mover.color != color:
            raise ValueError(f"No {color.value} piece on {origin}")

        squares = list(self.squares)
        current = origin
        for action in actions:
            if isinstance(action, Go):
                target = self._checked_index(action.pos)
                source = self.index(current)
                if target != source:
                    squares[target] = squares[source]
                    squares[source] = None
                current = action.pos
            elif isinstance(action, Take):
                squares[self._checked_index(action.pos)] = None
            elif isinstance(action, Promotion):
                index = self.index(current)
                piece = squares[index]
                squares[index] = Piece(piece.color, action.kind)
            else:
                raise ValueError(f"Unknown action: {action!r}")

        moved_index = self.index(current)
        for i, piece in enumerate(squares):
            if piece is None or piece.kind != PieceType.PAWN:
                continue
            if i == moved_index and mover.kind == PieceType.PAWN:
                leaped = current - origin == piece.orientation * 2
                status = PawnStatus.JUST_LEAPED if leaped else PawnStatus.CANNOT_LEAP
            elif piece.status == PawnStatus.JUST_LEAPED:
                status = PawnStatus.CANNOT_LEAP
            else:
                continue
            if status != piece.status:
                squares[i] = Piece.pawn(piece.color, piece.orientation, status)

        return Board(self.width, self.height, squares)

    def _checked_index(self, pos: Position) -> int:
        if not self.in_bounds(pos):
            raise ValueError(f"Action target {pos} is outside the board")
        return self.index(pos)


def _piece_from_code(code: str, pos: Position, height: int) -> Piece:
    """Create a piece from a board letter standing on ``pos``."""
    if len(code) != 1 or code.upper() not in {kind.value for kind in PieceType}:
        raise ValueError(f"Invalid piece code: {code!r}")
    color = Color.WHITE if code.isupper() else Color.BLACK
    kind = PieceType(code.upper())
    if kind != PieceType.PAWN:
        return Piece(color, kind)
    start_rank = height - 2 if color == Color.WHITE else 1
    status = PawnStatus.CAN_LEAP if pos.y == start_rank else PawnStatus.CANNOT_LEAP
    return Piece.pawn(color, PAWN_ORIENTATION[color], status)
