"""Shared fixtures: small deterministic games for exercising the engine."""
from typing import List

import pytest

from mcts2048.core.game import Game, IllegalMoveError


class TwoChoiceGame(Game):
    """One decision: 'a' ends the game with reward 0, 'b' with reward 10."""

    REWARDS = {None: 0.0, "a": 0.0, "b": 10.0}

    def __init__(self):
        self.choice = None

    def allowed_actions(self) -> List[str]:
        return ["a", "b"] if self.choice is None else []

    def make_move(self, action: str) -> None:
        if action not in self.allowed_actions():
            raise IllegalMoveError(action)
        self.choice = action

    def reward(self) -> float:
        return self.REWARDS[self.choice]


class WideGame(Game):
    """`width` actions per turn for `depth` turns; reward is the sum of the actions."""

    def __init__(self, width: int = 5, depth: int = 3):
        self.width = width
        self.depth = depth
        self.history: List[int] = []

    def allowed_actions(self) -> List[int]:
        if len(self.history) >= self.depth:
            return []
        return list(range(self.width))

    def make_move(self, action: int) -> None:
        if action not in self.allowed_actions():
            raise IllegalMoveError(action)
        self.history.append(action)

    def reward(self) -> float:
        return float(sum(self.history))


@pytest.fixture
def two_choice_game():
    return TwoChoiceGame()


@pytest.fixture
def wide_game():
    return WideGame()
