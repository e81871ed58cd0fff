"""Tests for EngineAdvisor: suggestions and graceful degradation."""

import logging

import pytest

from gambit.core.enums import PieceType
from gambit.core.fen import state_from_fen
from gambit.core.rules import Rules
from gambit.core.state import GameState
from gambit.core.types import parse_square
from gambit.engine.advisor import EngineAdvisor
from gambit.engine.errors import (
    EngineError,
    EngineStartError,
    EngineTerminatedError,
    EngineTimeoutError,
)
from gambit.engine.search import EngineRequest, Suggestion
from gambit.settings import EngineSettings


class _StubEngine:
    def __init__(
        self,
        move: str | None = "e7e5",
        error: EngineError | None = None,
        start_error: EngineError | None = None,
    ) -> None:
        self.move = move
        self.error = error
        self.start_error = start_error
        self.running = False
        self.starts = 0
        self.closed = 0
        self.requests: list[EngineRequest] = []

    @property
    def is_running(self) -> bool:
        return self.running

    def start(self) -> None:
        self.starts += 1
        if self.start_error is not None:
            raise self.start_error
        self.running = True

    def best_move(self, request: EngineRequest) -> str | None:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.move

    def close(self) -> None:
        self.closed += 1
        self.running = False


def _after_e4() -> GameState:
    state = GameState()
    Rules.make_move(state, parse_square("e2"), parse_square("e4"))
    return state


class TestSuggest:
    def test_returns_squares(self) -> None:
        advisor = EngineAdvisor(_StubEngine("e7e5"))
        assert advisor.suggest(_after_e4()) == Suggestion(
            parse_square("e7"), parse_square("e5"), None
        )

    def test_sends_history_and_movetime(self) -> None:
        engine = _StubEngine("e7e5")
        advisor = EngineAdvisor(engine, EngineSettings(movetime_ms=250))
        advisor.suggest(_after_e4())
        assert engine.requests == [
            EngineRequest(moves=("e2e4",), start_fen=None, movetime_ms=250)
        ]

    def test_promotion_suffix_both_ways(self) -> None:
        fen = "4k3/P7/8/8/8/8/8/4K3 w - - 0 1"
        engine = _StubEngine("a7a8q")
        advisor = EngineAdvisor(engine)
        suggestion = advisor.suggest(state_from_fen(fen))
        assert suggestion.promotion == PieceType.QUEEN
        assert engine.requests[0].start_fen == fen

        state = state_from_fen(fen)
        Rules.make_move(state, parse_square("a7"), parse_square("a8"), PieceType.ROOK)
        assert EngineRequest.from_state(state).moves == ("a7a8r",)

    def test_starts_engine_once(self) -> None:
        engine = _StubEngine("e7e5")
        advisor = EngineAdvisor(engine)
        advisor.suggest(_after_e4())
        advisor.suggest(_after_e4())
        assert engine.starts == 1

    def test_no_move(self) -> None:
        advisor = EngineAdvisor(_StubEngine(None))
        assert advisor.suggest(_after_e4()) is None
        assert advisor.enabled

    def test_illegal_move_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        advisor = EngineAdvisor(_StubEngine("e7e4"))
        with caplog.at_level(logging.WARNING, logger="gambit.engine.advisor"):
            assert advisor.suggest(_after_e4()) is None
        assert advisor.enabled
        assert "illegal" in caplog.text

    def test_wrong_side_ignored(self) -> None:
        advisor = EngineAdvisor(_StubEngine("d2d4"))
        assert advisor.suggest(_after_e4()) is None


class TestDegradation:
    @pytest.mark.parametrize(
        "error",
        [
            EngineTimeoutError("slow"),
            EngineTerminatedError("gone"),
        ],
    )
    def test_query_failure_disables(self, error: EngineError) -> None:
        engine = _StubEngine(error=error)
        advisor = EngineAdvisor(engine)
        assert advisor.suggest(_after_e4()) is None
        assert not advisor.enabled
        assert engine.closed == 1
        # Stays off without touching the engine again
        assert advisor.suggest(_after_e4()) is None
        assert len(engine.requests) == 1

    def test_garbage_reply_disables(self) -> None:
        advisor = EngineAdvisor(_StubEngine("xyz"))
        assert advisor.suggest(_after_e4()) is None
        assert not advisor.enabled

    def test_start_failure(self, caplog: pytest.LogCaptureFixture) -> None:
        engine = _StubEngine(start_error=EngineStartError("missing"))
        advisor = EngineAdvisor(engine)
        with caplog.at_level(logging.WARNING, logger="gambit.engine.advisor"):
            assert not advisor.start()
        assert not advisor.enabled
        assert "without engine" in caplog.text
        assert advisor.suggest(_after_e4()) is None
        assert engine.starts == 1

    def test_missing_binary(self, tmp_path) -> None:
        settings = EngineSettings(path=str(tmp_path / "no-such-engine"))
        advisor = EngineAdvisor(settings=settings)
        assert advisor.suggest(_after_e4()) is None
        assert not advisor.enabled

    def test_disable_and_close(self) -> None:
        engine = _StubEngine()
        advisor = EngineAdvisor(engine)
        advisor.disable()
        assert not advisor.start()
        advisor.close()
        assert engine.closed == 1
