"""FEN parsing and serialization.

Castling availability is not stored as a bitmask here: it is derived from
the ``has_moved`` flags of kings and rooks on their home squares, and a FEN
castling field sets those flags when a position is loaded.
"""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.piece import Piece
from gambit.core.state import GameState
from gambit.core.types import Square, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# FEN castling letter -> (color, rook column)
_CASTLING_LETTERS: dict[str, tuple[Color, int]] = {
    "K": (Color.WHITE, 7),
    "Q": (Color.WHITE, 0),
    "k": (Color.BLACK, 7),
    "q": (Color.BLACK, 0),
}
_KING_HOME_COL = 4


def state_from_fen(fen: str) -> GameState:
    """Parse a FEN string into a fresh :class:`GameState`."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement (first FEN rank is row 0)
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                board[row, col] = Piece.from_char(ch)
                col += 1
            if col > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if col != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    for color in Color:
        kings = [p for p in board.pieces(color) if p.kind == PieceType.KING]
        if len(kings) != 1:
            raise ValueError(
                f"FEN must contain exactly one {color!s} king: {fen!r}"
            )

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling: everything is "moved" unless the field grants the right
    for _, piece in board.occupied():
        if piece.kind in (PieceType.KING, PieceType.ROOK):
            piece.has_moved = True
    if castling_part != "-":
        seen: set[str] = set()
        for ch in castling_part:
            if ch not in _CASTLING_LETTERS or ch in seen:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            color, rook_col = _CASTLING_LETTERS[ch]
            king = board[color.back_rank, _KING_HOME_COL]
            rook = board[color.back_rank, rook_col]
            if not _is_home_piece(king, color, PieceType.KING) or not _is_home_piece(
                rook, color, PieceType.ROOK
            ):
                raise ValueError(
                    f"FEN castling right {ch!r} without king and rook at home: {fen!r}"
                )
            king.has_moved = False
            rook.has_moved = False

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        ep = parse_square(ep_part)
        # White to move captures onto rank 6 (row 2), Black onto rank 3 (row 5).
        expected_row = 2 if side == Color.WHITE else 5
        if ep.row != expected_row:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )
        # The pawn that double-stepped sits one row beyond the target.
        pusher = side.opposite
        victim = board[ep.row + pusher.forward, ep.col]
        if (
            board[ep] is not None
            or victim is None
            or victim.kind != PieceType.PAWN
            or victim.color != pusher
        ):
            raise ValueError(
                f"FEN en-passant square {ep_part!r} has no pawn behind it: {fen!r}"
            )

    # 5–6. Clocks are accepted but not tracked.
    for clock in parts[4:]:
        if not clock.isdigit():
            raise ValueError(f"Invalid FEN clock field: {clock!r}")

    return GameState(
        board=board,
        side_to_move=side,
        en_passant_target=ep,
        start_fen=fen,
    )


def state_to_fen(state: GameState) -> str:
    """Serialise a :class:`GameState` to FEN."""
    board = state.board

    # 1. Board
    rows: list[str] = []
    for row in range(8):
        empty = 0
        text = ""
        for col in range(8):
            piece = board[row, col]
            if piece is None:
                empty += 1
            else:
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if state.side_to_move == Color.WHITE else "b"

    # 3. Castling
    castling_str = ""
    for letter, (color, rook_col) in _CASTLING_LETTERS.items():
        king = board[color.back_rank, _KING_HOME_COL]
        rook = board[color.back_rank, rook_col]
        if (
            _is_home_piece(king, color, PieceType.KING)
            and _is_home_piece(rook, color, PieceType.ROOK)
            and not king.has_moved
            and not rook.has_moved
        ):
            castling_str += letter
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep = state.en_passant_target
    ep_str = square_name(ep) if ep is not None else "-"

    fullmove = 1 + state.ply_count // 2
    return f"{board_str} {side_str} {castling_str} {ep_str} 0 {fullmove}"


def _is_home_piece(piece: Piece | None, color: Color, kind: PieceType) -> bool:
    return piece is not None and piece.color == color and piece.kind == kind
