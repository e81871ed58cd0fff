"""Move application and high-level rules: legality, checkmate, stalemate."""

from __future__ import annotations

import logging

from gambit.core.enums import Color, GameResult, MoveFlag, PieceType
from gambit.core.movement import KING_OFFSETS, candidate_targets, is_pseudo_legal
from gambit.core.piece import Piece
from gambit.core.safety import would_be_in_check_after_move
from gambit.core.safety import is_in_check as _board_in_check
from gambit.core.special import (
    double_step_target,
    en_passant_victim_square,
    execute_castle,
    execute_en_passant,
    is_castling_move,
    is_en_passant_move,
    is_promotion_move,
    is_valid_promotion,
    promote,
)
from gambit.core.state import GameState, MoveRecord
from gambit.core.types import Square, as_square, is_on_board

_LOGGER = logging.getLogger(__name__)


class Rules:
    """Static rule-checker that operates on a :class:`GameState`.

    Legality is fully decided before the board is touched, so a rejected
    move never leaves a trace.
    """

    # ── Queries ──────────────────────────────────────────────────────────

    @staticmethod
    def is_in_check(state: GameState, color: Color) -> bool:
        return _board_in_check(color, state.board)

    @staticmethod
    def is_castling_move(state: GameState, start: Square, end: Square) -> bool:
        return is_castling_move(state.board, as_square(start), as_square(end))

    @staticmethod
    def is_en_passant_move(
        state: GameState, start: Square, end: Square, piece: Piece | None
    ) -> bool:
        return is_en_passant_move(
            state.board,
            piece,
            as_square(start),
            as_square(end),
            state.en_passant_target,
        )

    @staticmethod
    def classify(state: GameState, start: Square, end: Square) -> MoveFlag | None:
        """Legal move kind for *start* → *end*, or ``None`` if illegal.

        Ignores whose turn it is; :meth:`make_move` checks that.
        """
        start = as_square(start)
        end = as_square(end)
        board = state.board
        piece = board[start]
        if piece is None:
            return None

        capture: Square | None = None
        if is_en_passant_move(board, piece, start, end, state.en_passant_target):
            flag = MoveFlag.EN_PASSANT
            capture = en_passant_victim_square(start, end)
        elif is_pseudo_legal(piece, end, board, state.en_passant_target):
            if is_promotion_move(piece, end):
                flag = MoveFlag.PROMOTION
            elif double_step_target(piece, start, end) is not None:
                flag = MoveFlag.DOUBLE_PAWN
            else:
                flag = MoveFlag.NORMAL
        elif is_castling_move(board, start, end):
            # Intermediate and final squares were already checked for safety.
            return (
                MoveFlag.CASTLE_KINGSIDE
                if end.col > start.col
                else MoveFlag.CASTLE_QUEENSIDE
            )
        else:
            return None

        if would_be_in_check_after_move(board, piece.color, start, end, capture):
            return None
        return flag

    @staticmethod
    def legal_moves_for(state: GameState, square: Square) -> list[Square]:
        """Every square the piece on *square* may legally move to."""
        board = state.board
        square = as_square(square)
        piece = board[square]
        if piece is None:
            return []

        moves: list[Square] = []
        for target in candidate_targets(piece, board, state.en_passant_target):
            capture = None
            if is_en_passant_move(
                board, piece, square, target, state.en_passant_target
            ):
                capture = en_passant_victim_square(square, target)
            if not would_be_in_check_after_move(
                board, piece.color, square, target, capture
            ):
                moves.append(target)

        if piece.kind == PieceType.KING:
            for d_col in (-2, 2):
                target = square.offset(0, d_col)
                if is_on_board(*target) and is_castling_move(board, square, target):
                    moves.append(target)
        return moves

    @staticmethod
    def has_legal_moves(state: GameState, color: Color) -> bool:
        return any(
            Rules.legal_moves_for(state, sq) for sq, _ in _pieces_of(state, color)
        )

    @staticmethod
    def is_checkmate(state: GameState, color: Color) -> bool:
        if not Rules.is_in_check(state, color):
            return False

        board = state.board
        king_sq = board.king_square(color)
        king = board[king_sq]
        for d_row, d_col in KING_OFFSETS:
            target = king_sq.offset(d_row, d_col)
            if (
                is_on_board(*target)
                and is_pseudo_legal(king, target, board)
                and not would_be_in_check_after_move(board, color, king_sq, target)
            ):
                return False

        # The king cannot step out; a block or capture by another piece
        # still saves it.
        return not Rules.has_legal_moves(state, color)

    @staticmethod
    def is_stalemate(state: GameState, color: Color) -> bool:
        if Rules.is_in_check(state, color):
            return False
        return not Rules.has_legal_moves(state, color)

    @staticmethod
    def game_result(state: GameState) -> GameResult:
        """Result from the point of view of the side to move."""
        color = state.side_to_move
        if Rules.is_checkmate(state, color):
            return (
                GameResult.BLACK_WINS if color == Color.WHITE else GameResult.WHITE_WINS
            )
        if Rules.is_stalemate(state, color):
            return GameResult.DRAW
        return GameResult.IN_PROGRESS

    # ── Move application ─────────────────────────────────────────────────

    @staticmethod
    def make_move(
        state: GameState,
        start: Square,
        end: Square,
        promotion: PieceType | None = None,
    ) -> MoveRecord | None:
        """Validate and play *start* → *end* for the side to move.

        Returns the history record, or ``None`` when the move is illegal (the
        state is then untouched).  A pawn reaching the last rank without a
        *promotion* kind stays a pawn; an invalid kind rejects the move.
        """
        try:
            start = as_square(start)
            end = as_square(end)
        except ValueError:
            return None

        board = state.board
        piece = board[start]
        if piece is None or piece.color != state.side_to_move:
            return None

        flag = Rules.classify(state, start, end)
        if flag is None:
            return None
        if flag == MoveFlag.PROMOTION and promotion is not None:
            if not is_valid_promotion(promotion):
                return None

        captured = board[end]
        if flag == MoveFlag.EN_PASSANT:
            victim = execute_en_passant(board, start, end)
            captured_kind = victim.kind if victim is not None else None
        elif flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE):
            execute_castle(board, start, end)
            captured_kind = None
        else:
            board[end] = piece
            board[start] = None
            captured_kind = captured.kind if captured is not None else None
        piece.has_moved = True

        promoted_to: PieceType | None = None
        if flag == MoveFlag.PROMOTION:
            if promotion is None:
                _LOGGER.warning(
                    "Pawn reached %s without a promotion choice; left as a pawn",
                    end,
                )
            else:
                promote(board, end, promotion)
                promoted_to = promotion

        state.en_passant_target = double_step_target(piece, start, end)
        if state.en_passant_target is not None:
            _LOGGER.debug("En passant target set: %s", state.en_passant_target)

        record = MoveRecord(
            start=start,
            end=end,
            piece=piece.kind,
            flag=flag,
            captured=captured_kind,
            promotion=promoted_to,
        )
        state.move_history.append(record)
        state.side_to_move = state.side_to_move.opposite
        _LOGGER.debug("Applied %s (%s)", record.notation, flag.name)
        return record


def _pieces_of(state: GameState, color: Color) -> list[tuple[Square, Piece]]:
    # Snapshot: legal-move probing mutates the board temporarily.
    return [(sq, p) for sq, p in state.board.occupied() if p.color == color]
