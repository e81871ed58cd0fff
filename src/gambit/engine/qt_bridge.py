"""Qt bridge to run engine queries in a worker thread."""

from __future__ import annotations

import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from gambit.engine.errors import EngineError
from gambit.engine.protocol import decode_bestmove
from gambit.engine.search import EngineRequest, IEngine
from gambit.engine.uci import UciEngine
from gambit.settings import EngineSettings


class EngineWorker(QObject):
    """Thread-affine worker that asks the external engine for moves.

    Callers send an :class:`EngineRequest` snapshot, never the live game
    state, and match replies by ``request_id``.
    """

    best_move_ready = pyqtSignal(int, object, object, object)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_engine", "_settings")

    def __init__(self, settings: EngineSettings | None = None) -> None:
        super().__init__()
        self._settings = settings if settings is not None else EngineSettings()
        self._engine: IEngine = UciEngine(self._settings)
        self._cancel_event = threading.Event()

    @pyqtSlot(object, int)
    def request_move(self, request_obj: object, request_id: int) -> None:
        """Query the engine for *request_obj* and emit the outcome."""
        if not isinstance(request_obj, EngineRequest):
            self.search_error.emit(request_id, "Engine received invalid request")
            return

        self._cancel_event.clear()
        try:
            if not self._engine.is_running:
                self._engine.start()
            move = self._engine.best_move(request_obj)
            decoded = decode_bestmove(move) if move is not None else None
        except EngineError as exc:
            self._engine.close()
            self.search_error.emit(request_id, str(exc))
            return

        # UCI has no mid-search abort here; a cancelled reply is dropped.
        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if decoded is None:
            self.search_no_move.emit(request_id)
            return

        start, end, promotion = decoded
        self.best_move_ready.emit(request_id, start, end, promotion)

    @pyqtSlot()
    def cancel(self) -> None:
        """Discard the result of the query in flight."""
        self._cancel_event.set()

    @pyqtSlot(int)
    def set_movetime(self, movetime_ms: int) -> None:
        """Update the default think time (takes effect on the next query)."""
        self._settings.movetime_ms = max(1, int(movetime_ms))

    @pyqtSlot()
    def shutdown(self) -> None:
        """Stop the engine process; call before the thread quits."""
        self._engine.close()
