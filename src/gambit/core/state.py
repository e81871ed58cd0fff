"""Game state: board, turn, history and en-passant bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass, field

from gambit.core.board import Board
from gambit.core.enums import Color, MoveFlag, PieceType
from gambit.core.notation import move_code
from gambit.core.types import Square


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    start: Square
    end: Square
    piece: PieceType
    flag: MoveFlag = MoveFlag.NORMAL
    captured: PieceType | None = None
    promotion: PieceType | None = None

    @property
    def notation(self) -> str:
        return move_code(self.start, self.end)

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def __str__(self) -> str:
        return self.notation


@dataclass
class GameState:
    """Everything the rules need to know about a game in progress.

    Passed explicitly to every rules operation; there is no module-level
    game.  ``selected`` is UI-facing and never read by the rules.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    move_history: list[MoveRecord] = field(default_factory=list)
    en_passant_target: Square | None = None
    selected: Square | None = None
    start_fen: str | None = None

    def reset(self) -> None:
        """Back to the standard starting position with a fresh board."""
        self.board = Board.initial()
        self.side_to_move = Color.WHITE
        self.move_history.clear()
        self.en_passant_target = None
        self.selected = None
        self.start_fen = None

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def move_codes(self) -> list[str]:
        """History as 4-character coordinate codes."""
        return [record.notation for record in self.move_history]

    @property
    def last_move(self) -> MoveRecord | None:
        return self.move_history[-1] if self.move_history else None

    def last_move_notation(self) -> str | None:
        record = self.last_move
        return record.notation if record is not None else None

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)
