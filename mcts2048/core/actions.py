"""
Actions for the 2048 game.

A move in 2048 slides every tile towards one edge of the board, so the
full action space is the four directions.
"""
from __future__ import annotations
from enum import Enum
from typing import Dict, Final, List, Tuple


class Action(Enum):
    """Enum representing the four sliding directions of 2048."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def from_str(cls, name: str) -> Action:
        """
        Parse an action from its name (case insensitive).

        Args:
            name: Action name, e.g. "left" or "UP"

        Returns:
            Matching Action
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown action: {name!r}") from None

    def __str__(self) -> str:
        return self.name.capitalize()


# Canonical order in which legal actions are reported
ALL_ACTIONS: Final[List[Action]] = [Action.UP, Action.DOWN, Action.LEFT, Action.RIGHT]

# Arrow symbols for terminal display
ACTION_SYMBOLS: Final[Dict[Action, str]] = {
    Action.UP: "↑",
    Action.DOWN: "↓",
    Action.LEFT: "←",
    Action.RIGHT: "→",
}

# (axis, reverse) for each action: lines are read along `axis` and merged
# towards index 0, after flipping them when `reverse` is set.
ACTION_AXES: Final[Dict[Action, Tuple[int, bool]]] = {
    Action.UP: (0, False),
    Action.DOWN: (0, True),
    Action.LEFT: (1, False),
    Action.RIGHT: (1, True),
}
