"""GameController: the central orchestrator of a chess game.

Coordinates: Players, GameState, Rules.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from gambit.core.enums import Color, GameResult, PieceType
from gambit.core.fen import state_from_fen
from gambit.core.piece import Piece
from gambit.core.rules import Rules
from gambit.core.special import is_promotion_move
from gambit.core.state import GameState, MoveRecord
from gambit.core.types import Square, as_square
from gambit.game.interfaces import GamePhase, IGameController, IPlayer

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameState], None]
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]
PromotionChooser = Callable[[Color], PieceType | None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a chess game: validates moves, switches turns, tracks the
    click-selection state machine, prompts engine players and notifies
    listeners.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread).

    Args:
        promotion_chooser: ``(Color) -> PieceType | None`` asked for a piece
            kind when a pawn reaches the last rank and the caller did not
            name one.
    """

    __slots__ = (
        "_state",
        "_phase",
        "_result",
        "_players",
        "_prompting",
        "promotion_chooser",
        "events",
    )

    def __init__(self, promotion_chooser: PromotionChooser | None = None) -> None:
        self._state = GameState()
        self._phase = GamePhase.NOT_STARTED
        self._result = GameResult.IN_PROGRESS
        self._players: dict[Color, IPlayer] = {}
        self._prompting = False
        self.promotion_chooser = promotion_chooser
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def result(self) -> GameResult:
        return self._result

    @property
    def is_game_over(self) -> bool:
        return self._phase == GamePhase.GAME_OVER

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.side_to_move)

    @property
    def current_player_color(self) -> Color:
        return self._state.side_to_move

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── Lifecycle ────────────────────────────────────────────────────────

    def new_game(
        self,
        white: IPlayer | None = None,
        black: IPlayer | None = None,
        fen: str | None = None,
    ) -> None:
        """Set up a new game, optionally from a FEN position."""
        self._players = {}
        if white is not None:
            self._players[Color.WHITE] = white
        if black is not None:
            self._players[Color.BLACK] = black

        self._state = state_from_fen(fen) if fen is not None else GameState()
        self._result = GameResult.IN_PROGRESS
        self._set_phase(GamePhase.AWAITING_SELECTION)
        self._check_game_over()
        self._prompt_current_player()

    def reset_game(self) -> None:
        """Standard position, same players."""
        self._state.reset()
        self._result = GameResult.IN_PROGRESS
        self._set_phase(GamePhase.AWAITING_SELECTION)
        self._prompt_current_player()

    # ── Selection state machine ──────────────────────────────────────────

    def select_square(self, square: Square) -> bool:
        """Handle a click on *square*.

        With nothing selected, a click on one of the mover's pieces selects
        it.  With a piece selected, the click is the destination: the move is
        attempted and the selection cleared whatever the outcome.
        """
        if self.is_game_over:
            return False
        try:
            square = as_square(square)
        except ValueError:
            return False
        state = self._state

        if state.selected is None:
            piece = state.board[square]
            if piece is not None and piece.color == state.side_to_move:
                state.selected = square
                self._set_phase(GamePhase.AWAITING_DESTINATION)
            return False

        start = state.selected
        state.selected = None
        moved = self.make_move(start, square)
        if not moved and not self.is_game_over:
            self._set_phase(GamePhase.AWAITING_SELECTION)
        return moved

    @property
    def is_piece_selected(self) -> bool:
        return self._state.selected is not None

    # ── Moves ────────────────────────────────────────────────────────────

    def make_move(
        self,
        start: Square,
        end: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        if self.is_game_over:
            return False

        try:
            start = as_square(start)
            end = as_square(end)
        except ValueError:
            return False

        state = self._state
        if promotion is None and self.promotion_chooser is not None:
            piece = state.board[start]
            if (
                piece is not None
                and piece.color == state.side_to_move
                and is_promotion_move(piece, end)
                and Rules.classify(state, start, end) is not None
            ):
                promotion = self.promotion_chooser(piece.color)

        record = Rules.make_move(state, start, end, promotion)
        if record is None:
            return False

        state.selected = None
        self._emit_move(record)
        if self._check_game_over():
            return True

        self._set_phase(GamePhase.AWAITING_SELECTION)
        self._prompt_current_player()
        return True

    def last_move_notation(self) -> str | None:
        return self._state.last_move_notation()

    # ── Rule queries ─────────────────────────────────────────────────────

    def is_in_check(self, color: Color) -> bool:
        return Rules.is_in_check(self._state, color)

    def is_checkmate(self, color: Color) -> bool:
        return Rules.is_checkmate(self._state, color)

    def is_stalemate(self, color: Color) -> bool:
        return Rules.is_stalemate(self._state, color)

    def is_castling_move(self, start: Square, end: Square) -> bool:
        return Rules.is_castling_move(self._state, start, end)

    def is_en_passant_move(
        self, start: Square, end: Square, piece: Piece | None
    ) -> bool:
        return Rules.is_en_passant_move(self._state, start, end, piece)

    def legal_moves_for(self, square: Square) -> list[Square]:
        return Rules.legal_moves_for(self._state, square)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _check_game_over(self) -> bool:
        result = Rules.game_result(self._state)
        if result == GameResult.IN_PROGRESS:
            return False
        self._result = result
        _LOGGER.info("Game over: %s", result.name)
        self._set_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(result)
        return True

    def _prompt_current_player(self) -> None:
        """Let engine players move until a human is to play.

        Runs as a loop rather than recursion so engine-vs-engine games do not
        grow the stack.  A player that returns without moving ends the loop.
        """
        if self._prompting:
            return
        self._prompting = True
        try:
            while not self.is_game_over:
                cp = self.current_player
                if cp is None or cp.is_human:
                    break
                ply = self._state.ply_count
                self._set_phase(GamePhase.THINKING)
                cp.request_move(self)
                if self._state.ply_count == ply:
                    self._set_phase(GamePhase.AWAITING_SELECTION)
                    break
        finally:
            self._prompting = False

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record, self._state)

    def _set_phase(self, phase: GamePhase) -> None:
        if phase == self._phase:
            return
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)
