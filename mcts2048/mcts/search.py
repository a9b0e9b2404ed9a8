"""
Monte Carlo Tree Search over a single tree.

This module implements the SearchTree class, which owns a root node and
the game-state snapshot the tree was built from, and runs the four standard
MCTS phases against that snapshot:
1. Selection: Traverse fully expanded nodes with UCT1
2. Expansion: Add one child for an untried action
3. Simulation: Run a random playout from the new child
4. Backpropagation: Update statistics along the visited path

It also provides helpers for inspecting a tree (node counts, per-action
statistics, principal variation and an indented text rendering).
"""
from __future__ import annotations
from typing import Any, Dict, Hashable, List, Optional, Tuple
import logging
import random

from mcts2048.core.game import Game
from mcts2048.mcts.node import TreeNode

logger = logging.getLogger(__name__)


class SearchTree:
    """
    A single MCTS tree rooted at a fixed game state.

    Every iteration replays the tree against a fresh clone of the snapshot,
    so the statistics in the tree always describe that snapshot. The tree has
    to be rebuilt when the real game moves on.
    """

    def __init__(self, game: Game, rng: Optional[random.Random] = None):
        """
        Create a new tree.

        Args:
            game: State to search from (cloned, the caller's copy is untouched)
            rng: Random number generator for expansion and playouts
        """
        self.game = game.clone()
        self.root = TreeNode()
        self.rng = rng or random.Random()

    def iteration(self, c: float) -> float:
        """
        Run one MCTS iteration.

        Args:
            c: Exploration constant

        Returns:
            Reward of the iteration
        """
        return self.root.iteration(self.game.clone(), c, self.rng)

    def search(self, n_samples: int, c: float) -> List[Hashable]:
        """
        Run a fixed number of iterations and return the best action path.

        Args:
            n_samples: Number of iterations
            c: Exploration constant

        Returns:
            Best action sequence found so far
        """
        if n_samples < 1:
            raise ValueError("n_samples must be at least 1")

        for _ in range(n_samples):
            self.iteration(c)

        logger.debug("Tree at %d visits, %d root children",
                     self.root.visits, len(self.root.children))
        return self.best_actions()

    def best_actions(self) -> List[Hashable]:
        """
        Follow the highest mean-reward child from the root.

        Returns:
            Actions along the path; empty if the root has no children
        """
        best_actions = []
        node = self.root.best_child(0.0)
        while node is not None:
            best_actions.append(node.action)
            node = node.best_child(0.0)
        return best_actions

    def best_action(self) -> Optional[Hashable]:
        """
        Get the recommended first action.

        Returns:
            Best first action, or None if nothing has been explored
        """
        child = self.root.best_child(0.0)
        return child.action if child is not None else None

    def __str__(self) -> str:
        """Output an indented tree."""
        lines: List[str] = []

        def format_subtree(node: TreeNode, indent_level: int) -> None:
            lines.append("    " * indent_level + str(node))
            for child in node.children:
                format_subtree(child, indent_level + 1)

        format_subtree(self.root, 0)
        return "\n".join(lines)


def count_nodes(node: TreeNode) -> int:
    """
    Count the total number of nodes in the tree.

    Args:
        node: Root node of the tree

    Returns:
        Total number of nodes
    """
    count = 1  # Count this node
    for child in node.children:
        count += count_nodes(child)
    return count


def get_principal_variation(root: TreeNode, max_depth: int = 10) -> List[Tuple[Hashable, float]]:
    """
    Get the principal variation (most visited path) from the root.

    This is useful for analysis and debugging.

    Args:
        root: Root node of the MCTS tree
        max_depth: Maximum depth to explore

    Returns:
        List of (action, value) pairs representing the principal variation
    """
    result = []
    current = root
    depth = 0

    while current.children and depth < max_depth:
        best_child = max(current.children, key=lambda c: c.visits)
        result.append((best_child.action, best_child.mean_value))
        current = best_child
        depth += 1

    return result


def get_action_statistics(root: TreeNode) -> Dict[str, Dict[str, Any]]:
    """
    Get statistics for all actions from the root.

    Args:
        root: Root node of the MCTS tree

    Returns:
        Dictionary mapping action strings to statistics
    """
    result = {}

    for child in root.children:
        result[str(child.action)] = {
            "visits": child.visits,
            "reward": child.total_reward,
            "value": child.mean_value,
            "exploration": root.ucb_score(child, 1.0),
        }

    return result
