"""Abstract interfaces for the game layer.

Follows Dependency Inversion: the high-level GameController depends on
these ABCs, not on concrete player implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from gambit.core.enums import Color, PieceType

if TYPE_CHECKING:
    from gambit.core.piece import Piece
    from gambit.core.state import GameState
    from gambit.core.types import Square


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_SELECTION = auto()
    AWAITING_DESTINATION = auto()
    THINKING = auto()  # engine player is computing
    GAME_OVER = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or engine)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, controller: IGameController) -> None:
        """Begin the move-selection process.

        For humans this is a no-op (they interact via the UI).
        Engine players submit their move through ``controller.make_move``
        or leave the position untouched when they have nothing to offer.
        """


class IGameController(ABC):
    """The surface the rules engine exposes to a UI or engine adapter."""

    @property
    @abstractmethod
    def state(self) -> GameState: ...

    @abstractmethod
    def make_move(
        self, start: Square, end: Square, promotion: PieceType | None = None
    ) -> bool:
        """Submit a move. Returns True if legal and applied."""

    @abstractmethod
    def select_square(self, square: Square) -> bool:
        """Click-style input. Returns True when the click completed a move."""

    @abstractmethod
    def is_in_check(self, color: Color) -> bool: ...

    @abstractmethod
    def is_checkmate(self, color: Color) -> bool: ...

    @abstractmethod
    def is_stalemate(self, color: Color) -> bool: ...

    @abstractmethod
    def is_castling_move(self, start: Square, end: Square) -> bool: ...

    @abstractmethod
    def is_en_passant_move(
        self, start: Square, end: Square, piece: Piece | None
    ) -> bool: ...

    @abstractmethod
    def legal_moves_for(self, square: Square) -> list[Square]: ...

    @abstractmethod
    def reset_game(self) -> None:
        """Start over from the standard position."""

    @abstractmethod
    def last_move_notation(self) -> str | None: ...
