"""Check detection via simulate-and-revert.

The board is the only copy of the position, so "what if" questions are
answered by temporarily applying the move and putting every touched square
back afterwards.  :func:`simulated_move` guarantees the restore even when the
evaluation inside it raises.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from gambit.core.board import Board
from gambit.core.enums import Color
from gambit.core.movement import is_pseudo_legal
from gambit.core.types import Square


def is_in_check(color: Color, board: Board) -> bool:
    """Is *color*'s king attacked by any opposing piece?"""
    king_sq = board.king_square(color)
    for _, piece in board.occupied():
        if piece.color != color and is_pseudo_legal(piece, king_sq, board):
            return True
    return False


@contextmanager
def simulated_move(
    board: Board,
    start: Square,
    end: Square,
    capture: Square | None = None,
) -> Iterator[Board]:
    """Temporarily move the piece on *start* to *end*.

    *capture* names a victim square other than *end* (en passant); that
    square is vacated for the duration as well.  On exit all squares hold
    their original pieces and every piece's cached square is correct again.
    """
    moving = board[start]
    if moving is None:
        raise ValueError(f"No piece on {start} to simulate")
    displaced = board[end]
    captured = board[capture] if capture is not None else None

    try:
        if capture is not None:
            board[capture] = None
        board[end] = moving
        board[start] = None
        yield board
    finally:
        board[start] = moving
        board[end] = displaced
        if capture is not None:
            board[capture] = captured


def would_be_in_check_after_move(
    board: Board,
    color: Color,
    start: Square,
    end: Square,
    capture: Square | None = None,
) -> bool:
    """Would *color*'s king be attacked once *start* → *end* is played?"""
    with simulated_move(board, start, end, capture):
        return is_in_check(color, board)
