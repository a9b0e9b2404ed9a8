"""
Monte Carlo Tree Search (MCTS) engine.

This package provides a generic UCT MCTS engine for any game implementing
the `mcts2048.core.game.Game` contract. Every iteration works in four phases:

1. Selection: Starting from the root node, select child nodes using UCT1 until reaching
   a node that hasn't been fully expanded or is terminal.
2. Expansion: Create a new child node by taking a previously untried action.
3. Simulation: From the new node, perform a random playout to the end of the game.
4. Backpropagation: Update the statistics of all nodes in the path with the result.

An ensemble of independent trees is combined by majority vote to choose a move.
"""

from mcts2048.mcts.node import TreeNode
from mcts2048.mcts.playout import playout, expected_reward
from mcts2048.mcts.search import (
    SearchTree,
    count_nodes,
    get_action_statistics,
    get_principal_variation
)
from mcts2048.mcts.ensemble import MCTSEnsemble
from mcts2048.mcts.agent import MCTSAgent
from mcts2048.mcts.config import MCTSConfig

# Default configuration
DEFAULT_CONFIG = MCTSConfig(
    iterations=10,            # Iterations per tree per search round
    exploration_weight=1.0,   # UCT1 exploration constant
    ensemble_size=10,         # Number of independent trees
    time_per_move=1.0,        # Seconds of search per move
)

__all__ = [
    'MCTSAgent',
    'MCTSEnsemble',
    'SearchTree',
    'TreeNode',
    'MCTSConfig',
    'playout',
    'expected_reward',
    'count_nodes',
    'get_action_statistics',
    'get_principal_variation',
    'DEFAULT_CONFIG'
]
