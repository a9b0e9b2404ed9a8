"""
Constants for the 2048 game.

This module defines the board geometry and the tile values used by the
2048 implementation.
"""
from typing import Final

# Board geometry
WIDTH: Final[int] = 4
HEIGHT: Final[int] = 4

# Value of the tile placed on an empty square after every move
SPAWN_TILE: Final[int] = 2

# Number of tiles spawned when a new game starts
INITIAL_TILES: Final[int] = 2

# Value representing an empty square
EMPTY: Final[int] = 0

# Width of a rendered cell in the text representation
CELL_WIDTH: Final[int] = 5
