"""
Game mechanics for 2048.

This module defines the TwoFortyEight class, a single-player 2048 game that
implements the `Game` contract used by the MCTS engine:
- Sliding and merging tiles in one of four directions
- Spawning a new tile on a random empty square after every move
- Tracking the running score and the number of moves

The spawn position is the only stochastic part of the game. Each game owns
its own `random.Random` so that clones replay the same spawns and never
disturb the randomness of the game they were cloned from.
"""
from __future__ import annotations
from typing import List, Optional, Sequence, Tuple
import random

import numpy as np

from mcts2048.core.actions import ALL_ACTIONS, ACTION_AXES, Action
from mcts2048.core.constants import (
    WIDTH, HEIGHT, SPAWN_TILE, INITIAL_TILES, EMPTY, CELL_WIDTH
)
from mcts2048.core.game import Game, IllegalMoveError

Board = np.ndarray


def merge_line(line: Sequence[int]) -> Tuple[List[int], int, bool]:
    """
    Slide and merge a single line of tiles towards index 0.

    Empty squares are dropped, equal neighbours merge once, and the result
    is padded with empty squares back to the original length.

    Args:
        line: Tile values, 0 for empty

    Returns:
        Tuple of (merged line, points earned, whether the line changed)
    """
    tiles = [int(t) for t in line if t != EMPTY]

    merged: List[int] = []
    points = 0
    pending = EMPTY
    for tile in tiles:
        if tile == pending:
            merged.append(2 * tile)
            points += 2 * tile
            pending = EMPTY
        else:
            if pending != EMPTY:
                merged.append(pending)
            pending = tile
    if pending != EMPTY:
        merged.append(pending)

    merged.extend([EMPTY] * (len(line) - len(merged)))
    changed = merged != [int(t) for t in line]
    return merged, points, changed


def shift_and_merge(board: Board, action: Action) -> Tuple[Board, Optional[int]]:
    """
    Shift and merge the whole board in the given direction.

    Args:
        board: HEIGHT x WIDTH array of tiles
        action: Direction to slide

    Returns:
        Tuple of (new board, points earned). Points is None if no tile moved.
    """
    axis, reverse = ACTION_AXES[action]

    # Arrange the board so every row is a line merging towards column 0
    lines = board.T if axis == 0 else board
    if reverse:
        lines = lines[:, ::-1]

    new_lines = np.zeros_like(lines)
    all_points = 0
    any_changed = False
    for i, line in enumerate(lines):
        merged, points, changed = merge_line(line.tolist())
        new_lines[i] = merged
        all_points += points
        any_changed |= changed

    if reverse:
        new_lines = new_lines[:, ::-1]
    new_board = np.ascontiguousarray(new_lines.T if axis == 0 else new_lines)

    if not any_changed:
        return new_board, None
    return new_board, all_points


class TwoFortyEight(Game):
    """
    A 2048 game state.

    The board is a HEIGHT x WIDTH numpy array of tile values. The reward of a
    state is its running score: the sum of all tiles created by merges.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize an empty game.

        Args:
            seed: Seed for the game's own random number generator
        """
        self.board: Board = np.zeros((HEIGHT, WIDTH), dtype=np.uint32)
        self.score = 0.0
        self.moves = 0
        self._rng = random.Random(seed)

    @classmethod
    def new_empty(cls, seed: Optional[int] = None) -> TwoFortyEight:
        """Create a game with an empty board."""
        return cls(seed=seed)

    @classmethod
    def new(cls, seed: Optional[int] = None) -> TwoFortyEight:
        """
        Create a new game with the starting tiles already spawned.

        Args:
            seed: Seed for the game's own random number generator

        Returns:
            New game
        """
        game = cls(seed=seed)
        for _ in range(INITIAL_TILES):
            game.random_spawn()
        return game

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]], seed: Optional[int] = None) -> TwoFortyEight:
        """
        Create a game from explicit tile rows (mostly useful in tests).

        Args:
            rows: HEIGHT rows of WIDTH tile values
            seed: Seed for the game's own random number generator

        Returns:
            Game with the given board
        """
        game = cls(seed=seed)
        board = np.array(rows, dtype=np.uint32)
        if board.shape != (HEIGHT, WIDTH):
            raise ValueError(f"Board must be {HEIGHT}x{WIDTH}, got {board.shape}")
        game.board = board
        return game

    def get_tile(self, row: int, col: int) -> int:
        """Get the tile value at (row, col)."""
        return int(self.board[row, col])

    def set_tile(self, row: int, col: int, num: int) -> None:
        """Set the tile value at (row, col)."""
        self.board[row, col] = num

    def board_full(self) -> bool:
        """Check whether every square holds a tile."""
        return not (self.board == EMPTY).any()

    def max_tile(self) -> int:
        """Get the largest tile on the board."""
        return int(self.board.max())

    def random_spawn(self) -> None:
        """
        Place a new tile on a uniformly random empty square.

        Raises:
            ValueError: If the board is full
        """
        empty = np.flatnonzero(self.board == EMPTY)
        if empty.size == 0:
            raise ValueError("Cannot spawn a tile on a full board")

        idx = int(empty[self._rng.randrange(empty.size)])
        self.board[divmod(idx, WIDTH)] = SPAWN_TILE

    def allowed_actions(self) -> List[Action]:
        """
        Get the directions that would move at least one tile.

        Returns:
            Legal actions in the order up, down, left, right
        """
        return [
            action for action in ALL_ACTIONS
            if shift_and_merge(self.board, action)[1] is not None
        ]

    def make_move(self, action: Action) -> None:
        """
        Slide the board, collect the points and spawn a new tile.

        Args:
            action: Direction to slide

        Raises:
            IllegalMoveError: If no tile would move in that direction
        """
        new_board, points = shift_and_merge(self.board, action)
        if points is None:
            raise IllegalMoveError(action)

        self.board = new_board
        self.score += points
        self.moves += 1
        self.random_spawn()

    def reward(self) -> float:
        """Get the running score."""
        return float(self.score)

    def seed_randomness(self, seed: int) -> None:
        """Reseed the generator used for tile spawns."""
        self._rng.seed(seed)

    def __str__(self) -> str:
        """
        Render the board as a text grid.

        Returns:
            String representation
        """
        separator = "|" + "|".join("-" * CELL_WIDTH for _ in range(WIDTH)) + "|"
        blank = "|" + "|".join(" " * CELL_WIDTH for _ in range(WIDTH)) + "|"

        lines = [f"Moves={self.moves} Score={self.score:g}:", separator]
        for row in range(HEIGHT):
            cells = []
            for col in range(WIDTH):
                tile = self.get_tile(row, col)
                cells.append(f"{tile if tile != EMPTY else '':^{CELL_WIDTH}}")
            lines.extend([blank, "|" + "|".join(cells) + "|", blank, separator])
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"TwoFortyEight(score={self.score:g}, moves={self.moves}, max_tile={self.max_tile()})"
