"""
mcts2048 Core Package

This package contains the game side of the project:
- The game model contract consumed by the MCTS engine
- The 2048 game mechanics
- Actions and constants

All core components can be imported directly from this package.
"""

# Game contract
from mcts2048.core.game import Game, IllegalMoveError

# 2048
from mcts2048.core.twofortyeight import TwoFortyEight, merge_line, shift_and_merge

# Actions
from mcts2048.core.actions import Action, ALL_ACTIONS, ACTION_SYMBOLS

# Constants
from mcts2048.core.constants import WIDTH, HEIGHT, SPAWN_TILE

__all__ = [
    # Contract
    'Game', 'IllegalMoveError',

    # 2048
    'TwoFortyEight', 'merge_line', 'shift_and_merge',

    # Actions
    'Action', 'ALL_ACTIONS', 'ACTION_SYMBOLS',

    # Constants
    'WIDTH', 'HEIGHT', 'SPAWN_TILE',
]
