"""Shared engine request models and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple, Protocol

from gambit.core.notation import uci_move

if TYPE_CHECKING:
    from gambit.core.enums import PieceType
    from gambit.core.state import GameState
    from gambit.core.types import Square


@dataclass(slots=True, frozen=True)
class EngineRequest:
    """Immutable snapshot of what the engine needs to know about a game.

    Built on the owning thread so an engine running elsewhere never touches
    the live :class:`GameState`.
    """

    moves: tuple[str, ...] = ()
    start_fen: str | None = None
    movetime_ms: int | None = None

    @classmethod
    def from_state(
        cls, state: GameState, movetime_ms: int | None = None
    ) -> EngineRequest:
        moves = tuple(
            uci_move(record.start, record.end, record.promotion)
            for record in state.move_history
        )
        return cls(moves=moves, start_fen=state.start_fen, movetime_ms=movetime_ms)


class Suggestion(NamedTuple):
    """An engine move translated back into board coordinates."""

    start: Square
    end: Square
    promotion: PieceType | None = None


class IEngine(Protocol):
    """Protocol for move sources used by the advisor and the Qt worker."""

    @property
    def is_running(self) -> bool: ...

    def start(self) -> None: ...

    def best_move(self, request: EngineRequest) -> str | None: ...

    def close(self) -> None: ...
