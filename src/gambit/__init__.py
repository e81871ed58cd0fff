"""Gambit: a chess rules engine with an optional UCI engine adapter."""

__version__ = "0.1.0"
