"""Concrete player implementations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gambit.core.enums import Color
from gambit.game.interfaces import IGameController, IPlayer

if TYPE_CHECKING:
    from gambit.engine.advisor import EngineAdvisor

_LOGGER = logging.getLogger(__name__)


class HumanPlayer(IPlayer):
    """A human participant whose moves come from the UI.

    ``request_move`` is a no-op because humans select moves interactively.
    """

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color!s})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, controller: IGameController) -> None:
        pass  # Human moves arrive via controller.make_move()/select_square()


class EnginePlayer(IPlayer):
    """A participant whose moves come from an external engine.

    Once the advisor is disabled (engine missing or crashed) the player
    stops producing moves and the game continues human-only.

    Args:
        color: Side the engine plays.
        advisor: Source of move suggestions.
        name: Display name.
    """

    __slots__ = ("_color", "_name", "_advisor")

    def __init__(
        self,
        color: Color,
        advisor: EngineAdvisor,
        name: str = "Engine",
    ) -> None:
        self._color = color
        self._advisor = advisor
        self._name = name

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return not self._advisor.enabled

    def request_move(self, controller: IGameController) -> None:
        suggestion = self._advisor.suggest(controller.state)
        if suggestion is None:
            return
        start, end, promotion = suggestion
        if not controller.make_move(start, end, promotion):
            _LOGGER.warning(
                "%s suggested %s%s, which was rejected", self._name, start, end
            )
