"""Square type and coordinate helpers.

Board layout (row-major, Black at the top):
    row 0 = rank 8 (Black's back rank), row 7 = rank 1 (White's back rank)
    col 0 = file a, col 7 = file h

So ``Square(6, 4)`` is e2 and ``Square(0, 4)`` is e8.
"""

from __future__ import annotations

from typing import NamedTuple

FILES = "abcdefgh"
RANKS = "12345678"


class Square(NamedTuple):
    """A ``(row, col)`` board coordinate, each in 0–7."""

    row: int
    col: int

    def offset(self, d_row: int, d_col: int) -> Square:
        return Square(self.row + d_row, self.col + d_col)

    @property
    def name(self) -> str:
        return square_name(self)

    def __str__(self) -> str:
        return square_name(self)


def is_on_board(row: int, col: int) -> bool:
    """Whether ``(row, col)`` lies inside the 8x8 grid."""
    return 0 <= row < 8 and 0 <= col < 8


def as_square(sq: tuple[int, int]) -> Square:
    """Coerce any ``(row, col)`` pair into a validated :class:`Square`."""
    row, col = sq
    if not is_on_board(row, col):
        raise ValueError(f"Square off the board: {(row, col)!r}")
    return sq if isinstance(sq, Square) else Square(row, col)


def square_name(sq: tuple[int, int]) -> str:
    """Human-readable name, e.g. ``(6, 4)`` → ``'e2'``."""
    row, col = sq
    return FILES[col] + str(8 - row)


def parse_square(name: str) -> Square:
    """Parse a square name, e.g. ``'e2'`` → ``Square(6, 4)``."""
    if len(name) != 2 or name[0] not in FILES or name[1] not in RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(8 - int(name[1]), FILES.index(name[0]))


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(row, col) for row in range(8) for col in range(8)
)
