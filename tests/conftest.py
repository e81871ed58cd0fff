"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
import textwrap
from collections.abc import Iterator
from pathlib import Path

import pytest

from gambit.settings import EngineSettings

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QCoreApplication for Qt tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


# ── Fake UCI engine ──────────────────────────────────────────────────────────

_FAKE_ENGINE_SOURCE = textwrap.dedent(
    """
    import sys

    mode, log_path, reply = sys.argv[1], sys.argv[2], sys.argv[3]


    def say(text):
        sys.stdout.write(text + "\\n")
        sys.stdout.flush()


    with open(log_path, "a", encoding="utf-8") as log:
        for raw in sys.stdin:
            line = raw.strip()
            log.write(line + "\\n")
            log.flush()
            if line == "uci":
                if mode == "mute":
                    continue
                say("id name FakeFish")
                say("uciok")
            elif line == "isready":
                say("readyok")
            elif line.startswith("go"):
                if mode == "hang":
                    continue
                if mode == "crash":
                    sys.exit(3)
                say("info depth 1 score cp 20")
                if mode == "nomove":
                    say("bestmove (none)")
                else:
                    say("bestmove " + reply + " ponder a7a6")
            elif line == "quit":
                break
    """
)


class FakeEngine:
    """A tiny scripted UCI engine run with the current interpreter.

    Modes: ``normal`` answers every ``go`` with *reply*, ``nomove`` answers
    ``bestmove (none)``, ``hang`` never answers ``go``, ``crash`` exits on
    ``go`` and ``mute`` never completes the ``uci`` handshake.
    """

    def __init__(self, directory: Path) -> None:
        self.script = directory / "fake_engine.py"
        self.script.write_text(_FAKE_ENGINE_SOURCE, encoding="utf-8")
        self.log = directory / "fake_engine.log"

    def settings(
        self, mode: str = "normal", reply: str = "e7e5", **overrides: object
    ) -> EngineSettings:
        values: dict[str, object] = {
            "path": sys.executable,
            "args": (str(self.script), mode, str(self.log), reply),
            "movetime_ms": 10,
            "startup_timeout": 10.0,
            "response_margin": 10.0,
            "quit_timeout": 5.0,
        }
        values.update(overrides)
        return EngineSettings.from_mapping(values)

    def commands(self) -> list[str]:
        """Every line the engine received so far."""
        if not self.log.exists():
            return []
        return self.log.read_text(encoding="utf-8").splitlines()


@pytest.fixture
def fake_engine(tmp_path: Path) -> FakeEngine:
    return FakeEngine(tmp_path)
