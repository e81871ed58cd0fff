"""Never-raising bridge between a game state and an external engine."""

from __future__ import annotations

import logging

from gambit.core.rules import Rules
from gambit.core.state import GameState
from gambit.engine.errors import EngineError
from gambit.engine.protocol import decode_bestmove
from gambit.engine.search import EngineRequest, IEngine, Suggestion
from gambit.engine.uci import UciEngine
from gambit.settings import EngineSettings

_LOGGER = logging.getLogger(__name__)


class EngineAdvisor:
    """Asks an engine for moves and shields the game from its failures.

    The first :class:`EngineError` disables the advisor for good; after that
    :meth:`suggest` returns ``None`` and the game carries on human-only.
    """

    __slots__ = ("_engine", "_settings", "_enabled")

    def __init__(
        self,
        engine: IEngine | None = None,
        settings: EngineSettings | None = None,
    ) -> None:
        self._settings = settings if settings is not None else EngineSettings()
        self._engine: IEngine = (
            engine if engine is not None else UciEngine(self._settings)
        )
        self._enabled = True

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def engine(self) -> IEngine:
        return self._engine

    def start(self) -> bool:
        """Start the engine if needed; ``False`` leaves the advisor disabled."""
        if not self._enabled:
            return False
        if self._engine.is_running:
            return True
        try:
            self._engine.start()
        except EngineError as exc:
            self._fail("Engine unavailable", exc)
            return False
        return True

    def disable(self) -> None:
        self._enabled = False

    def close(self) -> None:
        self._engine.close()

    def suggest(self, state: GameState) -> Suggestion | None:
        """Best move for the side to move, already checked for legality."""
        if not self.start():
            return None

        request = EngineRequest.from_state(state, self._settings.movetime_ms)
        try:
            move = self._engine.best_move(request)
            if move is None:
                _LOGGER.info("Engine reports no move for %s", state.side_to_move)
                return None
            start, end, promotion = decode_bestmove(move)
        except EngineError as exc:
            self._fail("Engine query failed", exc)
            return None

        piece = state.board[start]
        if (
            piece is None
            or piece.color != state.side_to_move
            or Rules.classify(state, start, end) is None
        ):
            _LOGGER.warning("Engine suggested illegal move %s; ignoring it", move)
            return None
        return Suggestion(start, end, promotion)

    def _fail(self, message: str, exc: EngineError) -> None:
        _LOGGER.warning("%s (%s); continuing without engine", message, exc)
        self._enabled = False
        self._engine.close()
