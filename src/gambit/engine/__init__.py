"""External engine package: UCI adapter, advisor and Qt worker bridge."""

from gambit.engine.advisor import EngineAdvisor
from gambit.engine.errors import (
    EngineError,
    EngineProtocolError,
    EngineStartError,
    EngineTerminatedError,
    EngineTimeoutError,
)
from gambit.engine.qt_bridge import EngineWorker
from gambit.engine.search import EngineRequest, IEngine, Suggestion
from gambit.engine.uci import UciEngine

__all__ = [
    "EngineAdvisor",
    "EngineError",
    "EngineProtocolError",
    "EngineRequest",
    "EngineStartError",
    "EngineTerminatedError",
    "EngineTimeoutError",
    "EngineWorker",
    "IEngine",
    "Suggestion",
    "UciEngine",
]
