"""Pseudo-legal movement rules, one predicate per piece kind.

A move is *pseudo-legal* when it fits the piece's movement pattern and lands
on an empty or opponent-occupied square.  Whether it leaves the mover's own
king attacked is decided elsewhere (:mod:`gambit.core.safety`).
"""

from __future__ import annotations

from collections.abc import Callable

from gambit.core.board import Board
from gambit.core.enums import PieceType
from gambit.core.piece import Piece
from gambit.core.types import ALL_SQUARES, Square, is_on_board

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

MoveRule = Callable[[Piece, Square, Board, Square | None], bool]


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def has_en_passant_victim(
    piece: Piece, start: Square, target: Square, board: Board
) -> bool:
    """An enemy pawn stands beside *start* on the file of *target*."""
    victim = board[start.row, target.col]
    return (
        victim is not None
        and victim.kind == PieceType.PAWN
        and victim.color != piece.color
    )


def _lands_on_enemy_or_empty(piece: Piece, target: Square, board: Board) -> bool:
    occupant = board[target]
    return occupant is None or occupant.color != piece.color


def _path_is_clear(start: Square, target: Square, board: Board) -> bool:
    """Every square strictly between *start* and *target* is empty."""
    step_row = _sign(target.row - start.row)
    step_col = _sign(target.col - start.col)
    row, col = start.row + step_row, start.col + step_col
    while (row, col) != (target.row, target.col):
        if board[row, col] is not None:
            return False
        row += step_row
        col += step_col
    return True


# -- Per-kind rules ----------------------------------------------------------


def _pawn_rule(
    piece: Piece, target: Square, board: Board, en_passant: Square | None
) -> bool:
    start = piece.square
    direction = piece.color.forward
    d_row = target.row - start.row
    d_col = target.col - start.col

    if d_col == 0:
        if d_row == direction:
            return board[target] is None
        if d_row == 2 * direction and start.row == piece.color.pawn_rank:
            middle = Square(start.row + direction, start.col)
            return board[middle] is None and board[target] is None
        return False

    if abs(d_col) == 1 and d_row == direction:
        occupant = board[target]
        if occupant is not None:
            return occupant.color != piece.color
        return target == en_passant and has_en_passant_victim(
            piece, start, target, board
        )
    return False


def _knight_rule(
    piece: Piece, target: Square, board: Board, en_passant: Square | None
) -> bool:
    d_row = abs(target.row - piece.square.row)
    d_col = abs(target.col - piece.square.col)
    if (d_row, d_col) not in ((2, 1), (1, 2)):
        return False
    return _lands_on_enemy_or_empty(piece, target, board)


def _bishop_rule(
    piece: Piece, target: Square, board: Board, en_passant: Square | None
) -> bool:
    d_row = abs(target.row - piece.square.row)
    d_col = abs(target.col - piece.square.col)
    if d_row == 0 or d_row != d_col:
        return False
    return _path_is_clear(piece.square, target, board) and _lands_on_enemy_or_empty(
        piece, target, board
    )


def _rook_rule(
    piece: Piece, target: Square, board: Board, en_passant: Square | None
) -> bool:
    start = piece.square
    if (target.row == start.row) == (target.col == start.col):
        return False
    return _path_is_clear(start, target, board) and _lands_on_enemy_or_empty(
        piece, target, board
    )


def _queen_rule(
    piece: Piece, target: Square, board: Board, en_passant: Square | None
) -> bool:
    return _rook_rule(piece, target, board, en_passant) or _bishop_rule(
        piece, target, board, en_passant
    )


def _king_rule(
    piece: Piece, target: Square, board: Board, en_passant: Square | None
) -> bool:
    d_row = abs(target.row - piece.square.row)
    d_col = abs(target.col - piece.square.col)
    if max(d_row, d_col) != 1:
        # Two-square horizontal steps are castling attempts, handled by
        # gambit.core.special.
        return False
    return _lands_on_enemy_or_empty(piece, target, board)


MOVE_RULES: dict[PieceType, MoveRule] = {
    PieceType.PAWN: _pawn_rule,
    PieceType.KNIGHT: _knight_rule,
    PieceType.BISHOP: _bishop_rule,
    PieceType.ROOK: _rook_rule,
    PieceType.QUEEN: _queen_rule,
    PieceType.KING: _king_rule,
}


# -- Public API --------------------------------------------------------------


def is_pseudo_legal(
    piece: Piece,
    target: tuple[int, int],
    board: Board,
    en_passant: Square | None = None,
) -> bool:
    """Does moving *piece* to *target* fit its pattern and occupancy rule?"""
    if piece.square is None or not is_on_board(*target):
        return False
    target = Square(*target)
    if target == piece.square:
        return False
    return MOVE_RULES[piece.kind](piece, target, board, en_passant)


def pawn_targets(
    piece: Piece, board: Board, en_passant: Square | None = None
) -> list[Square]:
    """Destinations for a pawn: push, double push, captures, en passant."""
    start = piece.square
    direction = piece.color.forward
    targets: list[Square] = []

    one_step = start.offset(direction, 0)
    if is_on_board(*one_step) and board[one_step] is None:
        targets.append(one_step)
        if start.row == piece.color.pawn_rank:
            two_step = start.offset(2 * direction, 0)
            if board[two_step] is None:
                targets.append(two_step)

    for d_col in (-1, 1):
        capture = start.offset(direction, d_col)
        if not is_on_board(*capture):
            continue
        occupant = board[capture]
        if occupant is not None and occupant.color != piece.color:
            targets.append(capture)
        elif (
            occupant is None
            and capture == en_passant
            and has_en_passant_victim(piece, start, capture, board)
        ):
            targets.append(capture)
    return targets


def candidate_targets(
    piece: Piece, board: Board, en_passant: Square | None = None
) -> list[Square]:
    """Pseudo-legal destinations for *piece* (castling excluded)."""
    if piece.kind == PieceType.PAWN:
        return pawn_targets(piece, board, en_passant)
    return [
        sq for sq in ALL_SQUARES if is_pseudo_legal(piece, sq, board, en_passant)
    ]
