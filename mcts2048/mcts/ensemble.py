"""
Ensemble of independent MCTS trees.

Several trees are grown from clones of the same state, each with its own
random number generator and its own reseeded copy of the game's randomness,
so for a stochastic game every tree searches a different sample of the
future. Their recommendations are combined by majority vote.
"""
from __future__ import annotations
from typing import Hashable, List, Optional, Tuple
import logging
import random

from mcts2048.core.game import Game
from mcts2048.mcts.search import SearchTree

logger = logging.getLogger(__name__)


class MCTSEnsemble:
    """
    A collection of independent search trees over one canonical state.

    Trees never share statistics. `best_action` reduces their first-ply
    recommendations to a single action, and `advance_game` throws every tree
    away and starts again from a new state.

    Each tree searches its own clone of the game, and that clone is reseeded
    with `Game.seed_randomness` from the ensemble's seed stream so that
    stochastic transitions differ between trees. Games that want every tree
    to see the same randomness can leave `seed_randomness` as the no-op.
    """

    def __init__(self, game: Game, ensemble_size: int = 10, seed: Optional[int] = None):
        """
        Build the ensemble.

        Args:
            game: Canonical state to search from
            ensemble_size: Number of independent trees
            seed: Seed for all search randomness (None = nondeterministic)
        """
        if ensemble_size < 1:
            raise ValueError("ensemble_size must be at least 1")

        self.ensemble_size = ensemble_size
        self._seeds = random.Random(seed)
        self.trees: List[SearchTree] = []
        self._votes: List[Tuple[Hashable, int, float]] = []

        self._build(game)

    def _build(self, game: Game) -> None:
        """Create a fresh tree per ensemble member from clones of `game`."""
        trees = []
        for _ in range(self.ensemble_size):
            tree = SearchTree(game, rng=random.Random(self._seeds.getrandbits(64)))
            tree.game.seed_randomness(self._seeds.getrandbits(32))
            trees.append(tree)

        self.trees = trees
        self._votes = []

    def search(self, n_samples: int, c: float) -> None:
        """
        Run `n_samples` iterations on every tree.

        Args:
            n_samples: Iterations per tree
            c: Exploration constant
        """
        if n_samples < 1:
            raise ValueError("n_samples must be at least 1")

        for tree in self.trees:
            for _ in range(n_samples):
                tree.iteration(c)

        logger.debug("Searched %d trees x %d iterations", len(self.trees), n_samples)

    def best_action(self) -> Optional[Hashable]:
        """
        Get the action recommended by the majority of the trees.

        Each tree votes for its highest mean-reward root child. Ties between
        actions go to the larger sum of the voters' mean rewards, then to the
        action that was voted for first.

        Returns:
            Recommended action, or None if no tree has explored anything
        """
        # (action, votes, summed mean reward); actions only need ==
        votes: List[List] = []
        for tree in self.trees:
            child = tree.root.best_child(0.0)
            if child is None:
                continue
            for entry in votes:
                if entry[0] == child.action:
                    entry[1] += 1
                    entry[2] += child.mean_value
                    break
            else:
                votes.append([child.action, 1, child.mean_value])

        self._votes = [(action, count, value) for action, count, value in votes]
        if not votes:
            return None

        best = max(votes, key=lambda entry: (entry[1], entry[2]))
        return best[0]

    def action_votes(self) -> List[Tuple[Hashable, int, float]]:
        """
        Get the votes of the last `best_action` call.

        Returns:
            List of (action, number of votes, summed mean reward)
        """
        return list(self._votes)

    def advance_game(self, game: Game) -> None:
        """
        Discard all trees and rebuild the ensemble from a new state.

        No statistics survive: until the next `search`, `best_action`
        returns None.

        Args:
            game: The new canonical state
        """
        self._build(game)
        logger.debug("Ensemble reset to new state (%d trees)", self.ensemble_size)

    @property
    def total_visits(self) -> int:
        """Total number of iterations run across all trees."""
        return sum(tree.root.visits for tree in self.trees)

    def __len__(self) -> int:
        return len(self.trees)
