"""
Game model contract for the MCTS engine.

This module defines the capability set the search engine requires from a
game: enumerate legal actions, apply an action in place, report a reward and
clone itself. Any single-agent, perfect-information, turn-based game that
implements `Game` can be searched.

Actions are opaque to the engine. They only need to be comparable with `==`
(to detect already-explored children) and printable for diagnostics.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Hashable, List, Optional
import copy


class IllegalMoveError(ValueError):
    """Raised when an action is applied that is not currently legal."""

    def __init__(self, action: Any, message: Optional[str] = None):
        self.action = action
        super().__init__(message or f"Illegal move: {action}")


class Game(ABC):
    """
    Abstract base class for games the MCTS engine can search.

    A game instance is one point-in-time state. It owns any randomness
    source used for stochastic transitions, and `clone` must copy that
    source along with the rest of the state.
    """

    @abstractmethod
    def allowed_actions(self) -> List[Hashable]:
        """
        Get all legal actions from the current state.

        An empty list marks a terminal state. Calling this must not change
        the observable state.

        Returns:
            List of legal actions
        """
        pass

    @abstractmethod
    def make_move(self, action: Hashable) -> None:
        """
        Apply an action, modifying the state in place.

        Args:
            action: A legal action from `allowed_actions`

        Raises:
            IllegalMoveError: If the action is not legal in this state
        """
        pass

    @abstractmethod
    def reward(self) -> float:
        """
        Get the payoff associated with the current state.

        For games with an accumulating score this is the running score.

        Returns:
            Reward value
        """
        pass

    def clone(self) -> Game:
        """
        Create a deep copy of the game state, randomness source included.

        Returns:
            Independent copy of the game
        """
        return copy.deepcopy(self)

    def seed_randomness(self, seed: int) -> None:
        """
        Reseed the state's own randomness source.

        Deterministic games have nothing to seed, so the default does nothing.

        Args:
            seed: Seed value
        """

    def is_terminal(self) -> bool:
        """Check whether the state has no legal actions."""
        return not self.allowed_actions()
