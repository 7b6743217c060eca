"""Board coordinates and direction vectors."""

from dataclasses import dataclass
from typing import Tuple

FILES = "abcdefghijklmnopqrstuvwxyz"


@dataclass(frozen=True)
class Position:
    """A (file, rank) pair on an unbounded grid.

    ``x`` grows to the right (a-file is 0), ``y`` grows downwards: y = 0 is
    the top rank of the board, where Black starts.
    """

    x: int
    y: int

    def __add__(self, other: "Position") -> "Position":
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Position") -> "Position":
        return Position(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Position":
        return Position(-self.x, -self.y)

    def __mul__(self, factor: int) -> "Position":
        return Position(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def neighbors(self) -> Tuple["Position", "Position"]:
        """The two diagonals that flank this direction.

        For a pawn facing (0, 1) these are (-1, 1) and (1, 1).
        """
        side = Position(-self.y, self.x)
        return (self + side, self - side)

    def to_square(self, height: int) -> str:
        """Square name such as "e4" on a board of the given height."""
        return f"{file_name(self.x)}{height - self.y}"

    @classmethod
    def from_square(cls, square: str, height: int) -> "Position":
        """Parse a square name such as "e4" or "ab12"."""
        split = 0
        while split < len(square) and square[split] in FILES:
            split += 1
        if split == 0 or not square[split:].isdigit():
            raise ValueError(f"Invalid square: {square!r}")
        return cls(file_index(square[:split]), height - int(square[split:]))


def file_name(x: int) -> str:
    """Letters of file ``x``: a..z, then aa, ab, ... like spreadsheet columns."""
    if x < 0:
        raise ValueError(f"Invalid file index: {x}")
    name = ""
    x += 1
    while x:
        x, rest = divmod(x - 1, len(FILES))
        name = FILES[rest] + name
    return name


def file_index(name: str) -> int:
    """Inverse of ``file_name``."""
    x = 0
    for letter in name:
        x = x * len(FILES) + FILES.index(letter) + 1
    return x - 1


# Unit steps
DIAGONALS = (Position(-1, -1), Position(-1, 1), Position(1, -1), Position(1, 1))
ORTHOGONALS = (Position(0, -1), Position(-1, 0), Position(0, 1), Position(1, 0))

# Line-of-sight directions (queen rays, king steps)
LOS = DIAGONALS + ORTHOGONALS
