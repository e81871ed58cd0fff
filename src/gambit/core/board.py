"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from gambit.core.enums import Color, PieceType
from gambit.core.piece import Piece
from gambit.core.types import Square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8x8 grid of optional pieces.

    Pure storage: assignment is raw placement with no legality checks.  The
    grid is the single source of truth; placing a piece rewrites its cached
    ``square`` to match.
    """

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: tuple[int, int]) -> Piece | None:
        row, col = sq
        return self._grid[row][col]

    def __setitem__(self, sq: tuple[int, int], piece: Piece | None) -> None:
        row, col = sq
        self._grid[row][col] = piece
        if piece is not None:
            piece.square = Square(row, col)

    def is_empty(self, sq: tuple[int, int]) -> bool:
        row, col = sq
        return self._grid[row][col] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """Yield ``(square, piece)`` for every occupied square, row by row."""
        for row in range(8):
            for col in range(8):
                piece = self._grid[row][col]
                if piece is not None:
                    yield Square(row, col), piece

    def pieces(self, color: Color) -> list[Piece]:
        """All pieces of *color*."""
        return [piece for _, piece in self.occupied() if piece.color == color]

    def piece_count(self) -> int:
        return sum(1 for _ in self.occupied())

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*.

        A missing king can only come from a bug; callers must not recover.
        """
        for sq, piece in self.occupied():
            if piece.kind == PieceType.KING and piece.color == color:
                return sq
        raise ValueError(f"No {color.name} king on board")

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        """Deep copy: the new board owns fresh piece objects."""
        b = Board()
        for sq, piece in self.occupied():
            b[sq] = piece.copy()
        return b

    def clear(self) -> None:
        self._grid = [[None] * 8 for _ in range(8)]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col, kind in enumerate(_BACK_RANK):
            b[Square(Color.BLACK.back_rank, col)] = Piece(Color.BLACK, kind)
            b[Square(Color.WHITE.back_rank, col)] = Piece(Color.WHITE, kind)
            b[Square(Color.BLACK.pawn_rank, col)] = Piece(Color.BLACK, PieceType.PAWN)
            b[Square(Color.WHITE.pawn_rank, col)] = Piece(Color.WHITE, PieceType.PAWN)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return _placement(self) == _placement(other)

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = []
            for col in range(8):
                p = self._grid[row][col]
                cells.append(str(p) if p else ".")
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)


def _placement(board: Board) -> list[tuple[Square, Color, PieceType]]:
    return [(sq, p.color, p.kind) for sq, p in board.occupied()]
