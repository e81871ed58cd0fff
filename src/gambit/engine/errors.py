"""Failures of the external engine collaborator.

None of these ever reach the rules engine: the advisor and the Qt worker
turn them into "engine unavailable".
"""

from __future__ import annotations


class EngineError(Exception):
    """Base class for engine adapter failures."""


class EngineStartError(EngineError):
    """The engine process could not be launched."""


class EngineTimeoutError(EngineError):
    """The engine did not answer within the allotted time."""


class EngineTerminatedError(EngineError):
    """The engine process exited or closed its output."""


class EngineProtocolError(EngineError):
    """The engine replied with something that is not valid UCI."""
