"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from gambit.core import GameState, Rules, Square

    state = GameState()
    Rules.make_move(state, Square(6, 4), Square(4, 4))  # e2e4
    print(state.board)
"""

from gambit.core.board import Board
from gambit.core.enums import PROMOTION_TYPES, Color, GameResult, MoveFlag, PieceType
from gambit.core.fen import STARTING_FEN, state_from_fen, state_to_fen
from gambit.core.movement import candidate_targets, is_pseudo_legal, pawn_targets
from gambit.core.notation import move_code, parse_move_code, parse_uci_move, uci_move
from gambit.core.piece import Piece
from gambit.core.rules import Rules
from gambit.core.safety import is_in_check, simulated_move, would_be_in_check_after_move
from gambit.core.state import GameState, MoveRecord
from gambit.core.types import Square, parse_square, square_name

__all__ = [
    # Enums
    "Color",
    "GameResult",
    "MoveFlag",
    "PROMOTION_TYPES",
    "PieceType",
    # Types / helpers
    "Square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "GameState",
    "MoveRecord",
    "Piece",
    "Rules",
    # Movement / safety
    "candidate_targets",
    "is_in_check",
    "is_pseudo_legal",
    "pawn_targets",
    "simulated_move",
    "would_be_in_check_after_move",
    # Notation
    "STARTING_FEN",
    "move_code",
    "parse_move_code",
    "parse_uci_move",
    "state_from_fen",
    "state_to_fen",
    "uci_move",
]
