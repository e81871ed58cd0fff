"""Tests for EngineSettings."""

from gambit.settings import EngineSettings, clamp_skill_level


class TestEngineSettings:
    def test_defaults(self) -> None:
        s = EngineSettings()
        assert s.path == "stockfish"
        assert s.movetime_ms == 1000
        assert s.skill_level is None
        assert s.bestmove_timeout() == 1.0 + s.response_margin

    def test_bestmove_timeout_follows_request_movetime(self) -> None:
        s = EngineSettings(movetime_ms=1000, response_margin=0.25)
        assert s.bestmove_timeout(500) == 0.75
        assert s.bestmove_timeout() == 1.25

    def test_skill_clamped(self) -> None:
        assert EngineSettings(skill_level=42).skill_level == 20
        assert EngineSettings(skill_level=-1).skill_level == 0
        assert clamp_skill_level(7) == 7

    def test_movetime_at_least_one(self) -> None:
        assert EngineSettings(movetime_ms=0).movetime_ms == 1

    def test_args_become_tuple(self) -> None:
        assert EngineSettings(args=["--threads", "2"]).args == ("--threads", "2")

    def test_from_mapping_ignores_unknown_keys(self) -> None:
        s = EngineSettings.from_mapping(
            {"path": "/opt/sf", "movetime_ms": 250, "theme": "dark"}
        )
        assert s.path == "/opt/sf"
        assert s.movetime_ms == 250
