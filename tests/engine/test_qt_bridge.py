"""Tests for Qt engine bridge worker."""

from __future__ import annotations

from PyQt6.QtTest import QSignalSpy

from gambit.core.enums import PieceType
from gambit.core.types import parse_square
from gambit.engine.errors import EngineTerminatedError
from gambit.engine.qt_bridge import EngineWorker
from gambit.engine.search import EngineRequest


class _CancellingEngine:
    def __init__(self, worker: EngineWorker) -> None:
        self._worker = worker
        self.is_running = True

    def start(self) -> None:
        pass

    def best_move(self, _request: EngineRequest) -> str | None:
        self._worker.cancel()
        return "e2e4"

    def close(self) -> None:
        self.is_running = False


class _FixedEngine:
    def __init__(self, move: str | None) -> None:
        self._move = move
        self.is_running = False
        self.requests: list[EngineRequest] = []

    def start(self) -> None:
        self.is_running = True

    def best_move(self, request: EngineRequest) -> str | None:
        self.requests.append(request)
        return self._move

    def close(self) -> None:
        self.is_running = False


class _CrashedEngine(_FixedEngine):
    def best_move(self, request: EngineRequest) -> str | None:
        raise EngineTerminatedError("engine died")


class TestEngineWorker:
    def test_emits_best_move(self) -> None:
        worker = EngineWorker()
        engine = _FixedEngine("e7e8q")
        worker._engine = engine

        best_moves = QSignalSpy(worker.best_move_ready)
        worker.request_move(EngineRequest(moves=("e2e4",)), 3)

        assert len(best_moves) == 1
        assert best_moves[0][0] == 3
        assert best_moves[0][1] == parse_square("e7")
        assert best_moves[0][2] == parse_square("e8")
        assert best_moves[0][3] == PieceType.QUEEN
        assert engine.is_running
        assert engine.requests[0].moves == ("e2e4",)

    def test_emits_cancelled_when_query_is_cancelled(self) -> None:
        worker = EngineWorker()
        worker._engine = _CancellingEngine(worker)

        cancelled = QSignalSpy(worker.search_cancelled)
        best_moves = QSignalSpy(worker.best_move_ready)

        worker.request_move(EngineRequest(), 7)

        assert len(cancelled) == 1
        assert cancelled[0][0] == 7
        assert len(best_moves) == 0

    def test_emits_no_move_when_engine_has_none(self) -> None:
        worker = EngineWorker()
        worker._engine = _FixedEngine(None)

        no_move = QSignalSpy(worker.search_no_move)
        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)

        worker.request_move(EngineRequest(), 11)

        assert len(no_move) == 1
        assert no_move[0][0] == 11
        assert len(best_moves) == 0
        assert len(errors) == 0

    def test_engine_failure_emits_error(self) -> None:
        worker = EngineWorker()
        engine = _CrashedEngine("e2e4")
        worker._engine = engine

        errors = QSignalSpy(worker.search_error)
        worker.request_move(EngineRequest(), 5)

        assert len(errors) == 1
        assert errors[0][0] == 5
        assert "engine died" in errors[0][1]
        assert not engine.is_running

    def test_rejects_non_request(self) -> None:
        worker = EngineWorker()
        worker._engine = _FixedEngine("e2e4")

        errors = QSignalSpy(worker.search_error)
        worker.request_move(object(), 2)

        assert len(errors) == 1
        assert errors[0][0] == 2

    def test_set_movetime_and_shutdown(self) -> None:
        worker = EngineWorker()
        engine = _FixedEngine("e2e4")
        engine.is_running = True
        worker._engine = engine

        worker.set_movetime(0)
        assert worker._settings.movetime_ms == 1
        worker.shutdown()
        assert not engine.is_running

    def test_real_adapter(self, fake_engine) -> None:
        worker = EngineWorker(fake_engine.settings(reply="g8f6"))
        best_moves = QSignalSpy(worker.best_move_ready)
        try:
            worker.request_move(EngineRequest(moves=("e2e4",)), 1)
        finally:
            worker.shutdown()

        assert len(best_moves) == 1
        assert best_moves[0][1] == parse_square("g8")
        assert best_moves[0][3] is None
