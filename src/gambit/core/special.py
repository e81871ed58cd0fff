"""Special moves: castling, en passant and promotion."""

from __future__ import annotations

import logging

from gambit.core.board import Board
from gambit.core.enums import PROMOTION_TYPES, PieceType
from gambit.core.movement import has_en_passant_victim
from gambit.core.piece import Piece
from gambit.core.safety import is_in_check, would_be_in_check_after_move
from gambit.core.types import Square

_LOGGER = logging.getLogger(__name__)

_KINGSIDE_ROOK_COL = 7
_QUEENSIDE_ROOK_COL = 0
_KINGSIDE_ROOK_TARGET_COL = 5
_QUEENSIDE_ROOK_TARGET_COL = 3


# ── Castling ─────────────────────────────────────────────────────────────────


def castling_rook_squares(
    king_start: Square, king_end: Square
) -> tuple[Square, Square]:
    """Rook origin and destination for a castle from *king_start* to *king_end*."""
    row = king_start.row
    if king_end.col > king_start.col:
        return Square(row, _KINGSIDE_ROOK_COL), Square(row, _KINGSIDE_ROOK_TARGET_COL)
    return Square(row, _QUEENSIDE_ROOK_COL), Square(row, _QUEENSIDE_ROOK_TARGET_COL)


def is_castling_move(board: Board, start: Square, end: Square) -> bool:
    """Is *start* → *end* a castle the king on *start* may perform right now?"""
    king = board[start]
    if king is None or king.kind != PieceType.KING or king.has_moved:
        return False
    if end.row != start.row or abs(end.col - start.col) != 2:
        return False

    rook_sq, _ = castling_rook_squares(start, end)
    rook = board[rook_sq]
    if (
        rook is None
        or rook.kind != PieceType.ROOK
        or rook.color != king.color
        or rook.has_moved
    ):
        return False

    step = 1 if rook_sq.col > start.col else -1
    for col in range(start.col + step, rook_sq.col, step):
        if board[start.row, col] is not None:
            return False

    middle = Square(start.row, start.col + step)
    return not (
        is_in_check(king.color, board)
        or would_be_in_check_after_move(board, king.color, start, middle)
        or would_be_in_check_after_move(board, king.color, start, end)
    )


def execute_castle(board: Board, start: Square, end: Square) -> None:
    """Move king and rook together.  Eligibility must already be checked."""
    king = board[start]
    rook_from, rook_to = castling_rook_squares(start, end)
    rook = board[rook_from]
    assert king is not None and rook is not None

    board[end] = king
    board[start] = None
    board[rook_to] = rook
    board[rook_from] = None
    king.has_moved = True
    rook.has_moved = True
    _LOGGER.debug(
        "Castled %s king %s→%s, rook %s→%s", king.color, start, end, rook_from, rook_to
    )


# ── En passant ───────────────────────────────────────────────────────────────


def is_en_passant_move(
    board: Board,
    piece: Piece | None,
    start: Square,
    end: Square,
    target: Square | None,
) -> bool:
    """Is *piece* capturing en passant onto the current *target*?

    The pawn that double-stepped must still stand beside *start*.
    """
    if piece is None or piece.kind != PieceType.PAWN or target is None:
        return False
    return (
        end == target
        and end.row - start.row == piece.color.forward
        and abs(end.col - start.col) == 1
        and has_en_passant_victim(piece, start, end, board)
    )


def en_passant_victim_square(start: Square, end: Square) -> Square:
    """The double-stepped pawn sits on the mover's row, at the target's column."""
    return Square(start.row, end.col)


def execute_en_passant(board: Board, start: Square, end: Square) -> Piece | None:
    """Move the pawn onto *end* and remove the pawn it passes.  Returns the victim."""
    pawn = board[start]
    victim_sq = en_passant_victim_square(start, end)
    victim = board[victim_sq]

    board[end] = pawn
    board[start] = None
    board[victim_sq] = None
    _LOGGER.debug("En passant captured pawn at %s", victim_sq)
    return victim


def double_step_target(piece: Piece, start: Square, end: Square) -> Square | None:
    """Square a pawn passed over on a double step, else ``None``."""
    if piece.kind != PieceType.PAWN or abs(end.row - start.row) != 2:
        return None
    return Square((start.row + end.row) // 2, start.col)


# ── Promotion ────────────────────────────────────────────────────────────────


def is_promotion_move(piece: Piece, end: Square) -> bool:
    return piece.kind == PieceType.PAWN and end.row == piece.color.promotion_rank


def is_valid_promotion(kind: PieceType | None) -> bool:
    return kind in PROMOTION_TYPES


def promote(board: Board, square: Square, kind: PieceType) -> Piece:
    """Replace the pawn on *square* with a new piece of *kind*."""
    if not is_valid_promotion(kind):
        raise ValueError(f"Cannot promote to {kind!r}")
    pawn = board[square]
    if pawn is None or pawn.kind != PieceType.PAWN:
        raise ValueError(f"No pawn to promote on {square}")
    promoted = Piece(pawn.color, kind, has_moved=True)
    board[square] = promoted
    return promoted
