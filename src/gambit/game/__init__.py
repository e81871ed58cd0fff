"""Game management layer: controller, players, selection state machine.

Quick start::

    from gambit.core import Color, Square
    from gambit.game import GameController, HumanPlayer

    ctrl = GameController()
    ctrl.new_game(HumanPlayer(Color.WHITE, "Alice"), HumanPlayer(Color.BLACK, "Bob"))
    ctrl.make_move(Square(6, 4), Square(4, 4))
"""

from gambit.game.controller import GameController, GameEvents
from gambit.game.interfaces import GamePhase, IGameController, IPlayer
from gambit.game.player import EnginePlayer, HumanPlayer

__all__ = [
    # Interfaces
    "GamePhase",
    "IGameController",
    "IPlayer",
    # Concrete
    "EnginePlayer",
    "GameController",
    "GameEvents",
    "HumanPlayer",
]
