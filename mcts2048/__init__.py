"""
mcts2048 - A Monte Carlo Tree Search engine, with 2048 as its game.

This package provides a generic UCT search engine for single-player,
perfect-information games, along with a complete implementation of the
2048 sliding-tile game that the engine can play.
"""

__version__ = "0.1.0"
__author__ = "mcts2048 Team"

# Make key components available at package level
from mcts2048.core.game import Game, IllegalMoveError
from mcts2048.core.twofortyeight import TwoFortyEight
from mcts2048.core.actions import Action

# Version info as a tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split('.')))
