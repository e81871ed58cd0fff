"""Tests for player implementations."""

from gambit.core.enums import Color
from gambit.core.types import parse_square
from gambit.engine.advisor import EngineAdvisor
from gambit.engine.errors import EngineStartError
from gambit.engine.search import EngineRequest
from gambit.game.controller import GameController
from gambit.game.player import EnginePlayer, HumanPlayer


class _OneMoveEngine:
    def __init__(self, move: str | None) -> None:
        self.move = move
        self.running = False

    @property
    def is_running(self) -> bool:
        return self.running

    def start(self) -> None:
        self.running = True

    def best_move(self, request: EngineRequest) -> str | None:
        return self.move

    def close(self) -> None:
        self.running = False


class _MissingEngine(_OneMoveEngine):
    def start(self) -> None:
        raise EngineStartError("no such binary")


class TestHumanPlayer:
    def test_properties(self) -> None:
        p = HumanPlayer(Color.WHITE, "Alice")
        assert p.color == Color.WHITE
        assert p.name == "Alice"
        assert p.is_human

    def test_default_name(self) -> None:
        assert HumanPlayer(Color.BLACK).name == "Player (black)"

    def test_request_move_does_nothing(self) -> None:
        ctrl = GameController()
        ctrl.new_game()
        HumanPlayer(Color.WHITE).request_move(ctrl)
        assert ctrl.state.move_history == []


class TestEnginePlayer:
    def test_properties(self) -> None:
        p = EnginePlayer(Color.BLACK, EngineAdvisor(_OneMoveEngine("e7e5")))
        assert p.color == Color.BLACK
        assert p.name == "Engine"
        assert not p.is_human

    def test_plays_suggestion(self) -> None:
        ctrl = GameController()
        ctrl.new_game()
        p = EnginePlayer(Color.WHITE, EngineAdvisor(_OneMoveEngine("g1f3")))
        p.request_move(ctrl)
        assert ctrl.state.move_codes == ["g1f3"]

    def test_illegal_suggestion_is_not_played(self) -> None:
        ctrl = GameController()
        ctrl.new_game()
        p = EnginePlayer(Color.WHITE, EngineAdvisor(_OneMoveEngine("e2e5")))
        p.request_move(ctrl)
        assert ctrl.state.move_history == []
        assert ctrl.state.board[parse_square("e2")] is not None

    def test_missing_engine_falls_back_to_human(self) -> None:
        ctrl = GameController()
        advisor = EngineAdvisor(_MissingEngine("e2e4"))
        p = EnginePlayer(Color.WHITE, advisor)
        ctrl.new_game(p, HumanPlayer(Color.BLACK))
        assert ctrl.state.move_history == []
        assert not advisor.enabled
        assert p.is_human
        assert ctrl.make_move(parse_square("e2"), parse_square("e4"))
