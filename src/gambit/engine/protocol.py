"""UCI text protocol: building commands and reading replies.

Only the handful of commands the adapter needs::

    → uci                          ← ... uciok
    → setoption name Skill Level value 5
    → isready                      ← readyok
    → position startpos moves e2e4 e7e5
    → go movetime 1000             ← ... bestmove g1f3 [ponder ...]
"""

from __future__ import annotations

from collections.abc import Sequence

from gambit.core.enums import PieceType
from gambit.core.fen import STARTING_FEN
from gambit.core.notation import parse_uci_move
from gambit.core.types import Square
from gambit.engine.errors import EngineProtocolError
from gambit.settings import clamp_skill_level

UCI = "uci"
UCI_OK = "uciok"
IS_READY = "isready"
READY_OK = "readyok"
NEW_GAME = "ucinewgame"
QUIT = "quit"
BESTMOVE_PREFIX = "bestmove "

_NULL_MOVES = frozenset({"(none)", "0000"})


def position_command(moves: Sequence[str], start_fen: str | None = None) -> str:
    """``position startpos moves ...`` (or ``position fen ...``) for *moves*."""
    if start_fen is None or start_fen == STARTING_FEN:
        command = "position startpos"
    else:
        command = f"position fen {start_fen}"
    if moves:
        command += " moves " + " ".join(moves)
    return command


def go_command(movetime_ms: int) -> str:
    return f"go movetime {int(movetime_ms)}"


def skill_level_command(level: int) -> str:
    return f"setoption name Skill Level value {clamp_skill_level(level)}"


def is_bestmove_line(line: str) -> bool:
    return line.startswith(BESTMOVE_PREFIX) or line == BESTMOVE_PREFIX.strip()


def parse_bestmove(line: str) -> str | None:
    """Extract the move from a ``bestmove`` line; ``None`` when there is none."""
    if not is_bestmove_line(line):
        raise EngineProtocolError(f"Not a bestmove line: {line!r}")
    tokens = line.split()
    if len(tokens) < 2 or tokens[1] in _NULL_MOVES:
        return None
    return tokens[1]


def decode_bestmove(move: str) -> tuple[Square, Square, PieceType | None]:
    """Turn the engine's move text into squares for the rules engine."""
    try:
        return parse_uci_move(move)
    except ValueError as exc:
        raise EngineProtocolError(f"Unparseable engine move: {move!r}") from exc
