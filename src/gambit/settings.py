"""User-configurable settings."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

MIN_SKILL_LEVEL = 0
MAX_SKILL_LEVEL = 20


@dataclass
class EngineSettings:
    """How to reach and drive the external UCI engine."""

    path: str = "stockfish"
    args: tuple[str, ...] = ()
    movetime_ms: int = 1000
    skill_level: int | None = None  # 0–20, None leaves the engine default

    # Timeouts (seconds)
    startup_timeout: float = 5.0
    response_margin: float = 5.0  # added to movetime while awaiting bestmove
    quit_timeout: float = 2.0

    def __post_init__(self) -> None:
        self.args = tuple(self.args)
        if self.skill_level is not None:
            self.skill_level = clamp_skill_level(self.skill_level)
        self.movetime_ms = max(1, int(self.movetime_ms))

    def bestmove_timeout(self, movetime_ms: int | None = None) -> float:
        """Seconds to wait for ``bestmove`` after ``go movetime``."""
        if movetime_ms is None:
            movetime_ms = self.movetime_ms
        return movetime_ms / 1000 + self.response_margin

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> EngineSettings:
        """Build settings from a plain mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})


def clamp_skill_level(level: int) -> int:
    return max(MIN_SKILL_LEVEL, min(MAX_SKILL_LEVEL, int(level)))
