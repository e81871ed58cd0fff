"""Coordinate move codes (``e2e4``) as used in history and by UCI engines."""

from __future__ import annotations

from gambit.core.enums import PieceType
from gambit.core.types import Square, parse_square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}
_PROMO_MAP: dict[str, PieceType] = {v: k for k, v in _PROMO_CHARS.items()}


def move_code(start: tuple[int, int], end: tuple[int, int]) -> str:
    """4-character coordinate code, e.g. ``(6, 4), (4, 4)`` → ``'e2e4'``."""
    return square_name(start) + square_name(end)


def parse_move_code(code: str) -> tuple[Square, Square]:
    """Inverse of :func:`move_code`: ``'e2e4'`` → ``(Square(6, 4), Square(4, 4))``."""
    if len(code) != 4:
        raise ValueError(f"Invalid move code: {code!r}")
    return parse_square(code[0:2]), parse_square(code[2:4])


def uci_move(
    start: tuple[int, int],
    end: tuple[int, int],
    promotion: PieceType | None = None,
) -> str:
    """Long-algebraic UCI string: the move code plus a promotion letter."""
    base = move_code(start, end)
    if promotion is not None:
        base += _PROMO_CHARS[promotion]
    return base


def parse_uci_move(text: str) -> tuple[Square, Square, PieceType | None]:
    """Parse ``'e2e4'`` or ``'e7e8q'`` into squares and optional promotion."""
    if len(text) == 5:
        promotion = _PROMO_MAP.get(text[4])
        if promotion is None:
            raise ValueError(f"Invalid promotion in move {text!r}")
        start, end = parse_move_code(text[:4])
        return start, end, promotion
    start, end = parse_move_code(text)
    return start, end, None
