"""Subprocess adapter for an external UCI engine (e.g. Stockfish).

The engine's stdout is drained by a daemon reader thread into a queue so that
every wait on the engine can carry a timeout instead of blocking forever on
``readline``.  Any failure surfaces as an :class:`EngineError` subclass.
"""

from __future__ import annotations

import logging
import queue
import subprocess
import threading
import time
from collections.abc import Callable
from typing import IO

from gambit.engine.errors import (
    EngineError,
    EngineStartError,
    EngineTerminatedError,
    EngineTimeoutError,
)
from gambit.engine.protocol import (
    IS_READY,
    NEW_GAME,
    QUIT,
    READY_OK,
    UCI,
    UCI_OK,
    go_command,
    is_bestmove_line,
    parse_bestmove,
    position_command,
    skill_level_command,
)
from gambit.engine.search import EngineRequest
from gambit.settings import EngineSettings, clamp_skill_level

_LOGGER = logging.getLogger(__name__)

# Sentinel pushed by the reader thread once the engine closes stdout.
_EOF = None


def _pump_lines(stream: IO[str], sink: queue.Queue[str | None]) -> None:
    try:
        for line in stream:
            sink.put(line.strip())
    except (OSError, ValueError):
        pass  # stream closed underneath us during shutdown
    finally:
        sink.put(_EOF)


class UciEngine:
    """Blocking, timeout-guarded client for one UCI engine process.

    Usage::

        with UciEngine(EngineSettings(path="/usr/games/stockfish")) as engine:
            move = engine.best_move(EngineRequest(moves=("e2e4",)))
    """

    __slots__ = ("_settings", "_process", "_lines", "_reader")

    def __init__(self, settings: EngineSettings | None = None) -> None:
        self._settings = settings if settings is not None else EngineSettings()
        self._process: subprocess.Popen[str] | None = None
        self._lines: queue.Queue[str | None] = queue.Queue()
        self._reader: threading.Thread | None = None

    # ── Lifecycle ────────────────────────────────────────────────────────

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @property
    def is_running(self) -> bool:
        return self._process is not None and self._process.poll() is None

    def start(self) -> None:
        """Launch the process and complete the ``uci``/``isready`` handshake."""
        if self.is_running:
            return
        self.close()

        command = [self._settings.path, *self._settings.args]
        try:
            self._process = subprocess.Popen(
                command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                bufsize=1,
            )
        except OSError as exc:
            raise EngineStartError(
                f"Cannot start engine {command[0]!r}: {exc}"
            ) from exc

        self._lines = queue.Queue()
        assert self._process.stdout is not None
        self._reader = threading.Thread(
            target=_pump_lines,
            args=(self._process.stdout, self._lines),
            name="uci-reader",
            daemon=True,
        )
        self._reader.start()

        timeout = self._settings.startup_timeout
        try:
            self._send(UCI)
            self._wait_for(lambda line: line == UCI_OK, timeout)
            if self._settings.skill_level is not None:
                self._send(skill_level_command(self._settings.skill_level))
            self._sync(timeout)
        except EngineError:
            self.close()
            raise
        _LOGGER.info("Engine %r ready", command[0])

    def close(self) -> None:
        """Ask the engine to quit; kill it if it does not comply in time."""
        process = self._process
        if process is None:
            return
        self._process = None

        if process.poll() is None:
            try:
                self._write(process, QUIT)
            except EngineTerminatedError:
                pass
            try:
                process.wait(timeout=self._settings.quit_timeout)
            except subprocess.TimeoutExpired:
                _LOGGER.warning("Engine ignored quit; killing pid %s", process.pid)
                process.kill()
                process.wait()

        for stream in (process.stdin, process.stdout):
            if stream is not None:
                try:
                    stream.close()
                except OSError:
                    pass
        if self._reader is not None:
            self._reader.join(timeout=self._settings.quit_timeout)
            self._reader = None

    def __enter__(self) -> UciEngine:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ── Commands ─────────────────────────────────────────────────────────

    def new_game(self) -> None:
        self._send(NEW_GAME)
        self._sync(self._settings.startup_timeout)

    def set_skill_level(self, level: int) -> None:
        """Change difficulty (0–20) for subsequent searches."""
        level = clamp_skill_level(level)
        self._settings.skill_level = level
        if self.is_running:
            self._send(skill_level_command(level))
            self._sync(self._settings.startup_timeout)

    def best_move(self, request: EngineRequest) -> str | None:
        """Search the position in *request*; ``None`` if the engine has no move.

        A timeout leaves the engine in an unknown state, so the process is
        shut down before the error propagates.
        """
        movetime_ms = (
            request.movetime_ms
            if request.movetime_ms is not None
            else self._settings.movetime_ms
        )
        self._send(position_command(request.moves, request.start_fen))
        self._send(go_command(movetime_ms))
        try:
            line = self._wait_for(
                is_bestmove_line, self._settings.bestmove_timeout(movetime_ms)
            )
        except EngineTimeoutError:
            self.close()
            raise
        return parse_bestmove(line)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _sync(self, timeout: float) -> None:
        self._send(IS_READY)
        self._wait_for(lambda line: line == READY_OK, timeout)

    def _send(self, command: str) -> None:
        if self._process is None or self._process.poll() is not None:
            raise EngineTerminatedError("Engine is not running")
        self._write(self._process, command)

    @staticmethod
    def _write(process: subprocess.Popen[str], command: str) -> None:
        _LOGGER.debug("→ %s", command)
        stdin = process.stdin
        if stdin is None:
            raise EngineTerminatedError("Engine stdin is closed")
        try:
            stdin.write(command + "\n")
            stdin.flush()
        except (BrokenPipeError, OSError, ValueError) as exc:
            raise EngineTerminatedError(f"Lost connection to engine: {exc}") from exc

    def _wait_for(self, matches: Callable[[str], bool], timeout: float) -> str:
        """Consume lines until one *matches*; raise on timeout or EOF."""
        deadline = time.monotonic() + timeout
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise EngineTimeoutError(f"No reply from engine within {timeout:.1f}s")
            try:
                line = self._lines.get(timeout=remaining)
            except queue.Empty:
                raise EngineTimeoutError(
                    f"No reply from engine within {timeout:.1f}s"
                ) from None
            if line is _EOF:
                raise EngineTerminatedError("Engine closed its output")
            _LOGGER.debug("← %s", line)
            if matches(line):
                return line
