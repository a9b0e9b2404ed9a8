"""
Monte Carlo Tree Search node.

This module defines the TreeNode class which represents a decision point in
the search tree. A node does not store a game state: the state is rebuilt on
every iteration by replaying the actions on the path from the root onto a
fresh clone of the tree's snapshot.
"""
from __future__ import annotations
from typing import Hashable, List, Optional
import math
import random

from mcts2048.core.game import Game
from mcts2048.mcts.playout import playout


class TreeNode:
    """
    A node in the Monte Carlo search tree.

    Each node tracks the action that led to it, the statistics of every
    iteration that passed through it, and the children explored so far.
    """

    def __init__(self, action: Optional[Hashable] = None):
        """
        Initialize an empty node.

        Args:
            action: The action that led to this node (None for the root)
        """
        self.action = action
        self.children: List[TreeNode] = []

        # Set once the corresponding state has no legal actions
        self.terminal_state = False
        # Set once every legal action has a child
        self.fully_expanded = False

        # Node statistics
        self.visits = 0
        self.total_reward = 0.0

    @property
    def mean_value(self) -> float:
        """Average reward of the iterations through this node."""
        if self.visits == 0:
            return 0.0
        return self.total_reward / self.visits

    def ucb_score(self, child: TreeNode, c: float) -> float:
        """
        Calculate the UCT1 score for a child node.

        UCT1 = q / n + c * sqrt(2 * ln(parent_n) / n)

        Args:
            child: Child node to calculate score for
            c: Exploration constant

        Returns:
            UCT1 score
        """
        # Unvisited children are always explored first
        if child.visits == 0:
            return math.inf

        exploitation = child.total_reward / child.visits
        if c == 0:
            return exploitation

        exploration = math.sqrt(2.0 * math.log(self.visits) / child.visits)
        return exploitation + c * exploration

    def best_child(self, c: float) -> Optional[TreeNode]:
        """
        Find the best child according to UCT1.

        Ties go to the child explored first. With c = 0 this is pure
        exploitation (highest mean reward).

        Args:
            c: Exploration constant

        Returns:
            Best child, or None if the node has no children
        """
        if not self.children:
            return None
        return max(self.children, key=lambda child: self.ucb_score(child, c))

    def untried_actions(self, game: Game) -> List[Hashable]:
        """
        Get the legal actions that have no child yet.

        Args:
            game: State corresponding to this node

        Returns:
            Untried actions in the game's order
        """
        tried = [child.action for child in self.children]
        return [action for action in game.allowed_actions() if action not in tried]

    def expand(self, game: Game, rng: random.Random) -> Optional[TreeNode]:
        """
        Add a child for a randomly chosen, previously untried action.

        If the state has no legal actions the node is marked terminal
        instead and None is returned.

        Args:
            game: State corresponding to this node
            rng: Random number generator used to pick the action

        Returns:
            The new child, or None for a terminal state
        """
        allowed = game.allowed_actions()
        if not allowed:
            self.terminal_state = True
            self.fully_expanded = True
            return None

        tried = [child.action for child in self.children]
        assert all(action in allowed for action in tried), "child action is not legal"
        candidates = [action for action in allowed if action not in tried]
        assert candidates, "expand called on a fully expanded node"

        if len(candidates) == 1:
            self.fully_expanded = True

        child = TreeNode(rng.choice(candidates))
        self.children.append(child)
        return child

    def update(self, reward: float) -> None:
        """
        Record the result of one iteration through this node.

        Args:
            reward: Simulation result
        """
        self.visits += 1
        self.total_reward += reward

    def iteration(self, game: Game, c: float, rng: random.Random) -> float:
        """
        Perform one MCTS iteration starting at this node.

        Selection descends through fully expanded nodes with UCT1, the first
        node that is not fully expanded gets one new child which is
        evaluated with a random playout, and the reward is backed up along
        the visited path. A terminal node is its own simulation result.

        Args:
            game: Working copy of the state at this node; it is modified
            c: Exploration constant
            rng: Random number generator for expansion and playouts

        Returns:
            The reward backed up through this node
        """
        path = [self]
        node = self

        # Selection
        while node.fully_expanded and not node.terminal_state:
            node = node.best_child(c)
            game.make_move(node.action)
            path.append(node)

        if node.terminal_state:
            reward = game.reward()
        else:
            # Expansion and simulation
            child = node.expand(game, rng)
            if child is None:
                reward = game.reward()
            else:
                game.make_move(child.action)
                reward = playout(game, rng).reward()
                child.update(reward)

        # Backpropagation
        for visited in path:
            visited.update(reward)

        return reward

    def __str__(self) -> str:
        label = "Root" if self.action is None else str(self.action)
        return f"{label} q={self.total_reward:g} n={self.visits}"

    def __repr__(self) -> str:
        return (f"TreeNode(action={self.action!r}, "
                f"visits={self.visits}, "
                f"reward={self.total_reward:.2f}, "
                f"children={len(self.children)})")
