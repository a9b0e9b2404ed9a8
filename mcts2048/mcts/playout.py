"""
Random playouts for Monte Carlo evaluation.

A playout plays uniformly random legal actions from a state until no legal
action remains. It is the simulation step of MCTS, and averaging many of
them gives a pure Monte Carlo estimate of a state's value.
"""
from typing import Optional
import random

from mcts2048.core.game import Game


def playout(game: Game, rng: Optional[random.Random] = None) -> Game:
    """
    Perform a random playout.

    The input state is cloned first and never modified.

    Args:
        game: State to start from
        rng: Random number generator used to pick actions

    Returns:
        The terminal state reached
    """
    rng = rng or random.Random()
    game = game.clone()

    potential_moves = game.allowed_actions()
    while potential_moves:
        game.make_move(rng.choice(potential_moves))
        potential_moves = game.allowed_actions()

    return game


def expected_reward(
    game: Game,
    n_samples: int,
    rng: Optional[random.Random] = None
) -> float:
    """
    Estimate the expected reward of a state from random playouts.

    Args:
        game: State to evaluate
        n_samples: Number of independent playouts
        rng: Random number generator used to pick actions

    Returns:
        Mean reward of the playouts
    """
    if n_samples < 1:
        raise ValueError("n_samples must be at least 1")

    rng = rng or random.Random()
    score_sum = 0.0
    for _ in range(n_samples):
        score_sum += playout(game, rng).reward()
    return score_sum / n_samples
