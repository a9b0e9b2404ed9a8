#!/usr/bin/env python
"""
Command-line interface for watching the MCTS agent play 2048.

Example usage:
    # One game, one second of search per move, ten trees
    mcts2048-play -t 1.0 -e 10

    # Ten quick reproducible games with a summary at the end
    mcts2048-play --games 10 -t 0.1 -e 4 --seed 7
"""
from typing import Any, Dict, List, Optional
import argparse
import logging
import random
import sys

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from tqdm import tqdm

from mcts2048.core.actions import ACTION_SYMBOLS, Action
from mcts2048.core.constants import EMPTY, HEIGHT, WIDTH
from mcts2048.core.twofortyeight import TwoFortyEight
from mcts2048.mcts.agent import MCTSAgent
from mcts2048.mcts.config import MCTSConfig
from mcts2048.mcts.playout import expected_reward

logger = logging.getLogger(__name__)

console = Console()

# Rich styles for tiles (for terminal display)
TILE_STYLES: Dict[int, str] = {
    2: "white",
    4: "bright_white",
    8: "yellow",
    16: "bright_yellow",
    32: "dark_orange",
    64: "red",
    128: "bright_red",
    256: "magenta",
    512: "bright_magenta",
    1024: "cyan",
    2048: "bold bright_green",
}


def tile_style(tile: int) -> str:
    """Get the rich style for a tile value."""
    return TILE_STYLES.get(tile, "bold bright_blue")


def render_board(game: TwoFortyEight, action: Optional[Action] = None) -> Table:
    """
    Render the board as a rich table.

    Args:
        game: Game to render
        action: The move that produced this board, if any

    Returns:
        Renderable table
    """
    title = f"Moves={game.moves} Score={game.score:g}"
    if action is not None:
        title = f"{ACTION_SYMBOLS[action]} {action}  {title}"

    table = Table(title=title, show_header=False, box=box.SQUARE, show_lines=True)
    for _ in range(WIDTH):
        table.add_column(justify="center", width=6)

    for row in range(HEIGHT):
        cells = []
        for col in range(WIDTH):
            tile = game.get_tile(row, col)
            cells.append("" if tile == EMPTY else f"[{tile_style(tile)}]{tile}[/]")
        table.add_row(*cells)
    return table


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="2048 playing with Monte Carlo Tree Search.")

    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Be verbose")
    parser.add_argument("-t", "--time-per-move", type=float, default=1.0,
                        help="Time budget per move (in seconds)")
    parser.add_argument("-e", "--ensemble-size", type=int, default=10,
                        help="Ensemble size")
    parser.add_argument("-n", "--iterations", type=int, default=10,
                        help="Iterations per tree per search round")
    parser.add_argument("-c", "--exploration", type=float, default=1.0,
                        help="UCT1 exploration constant")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed")
    parser.add_argument("--games", type=int, default=1,
                        help="Number of games to play")
    parser.add_argument("--max-moves", type=int, default=None,
                        help="Maximum number of moves per game")
    parser.add_argument("--rollouts", type=int, default=0,
                        help="Print a pure Monte Carlo estimate of the start position "
                             "from this many random playouts")

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    """Route log records through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def play_one(args: argparse.Namespace, config: MCTSConfig, seed: Optional[int], show_board: bool) -> Dict[str, Any]:
    """
    Play a single game and return its statistics.

    Args:
        args: Parsed command-line arguments
        config: MCTS configuration
        seed: Seed for the game's tile spawns
        show_board: Whether to print the board after every move

    Returns:
        Dictionary of game statistics
    """
    game = TwoFortyEight.new(seed=seed)

    if args.rollouts > 0:
        estimate = expected_reward(game, args.rollouts, random.Random(seed))
        console.print(f"Random-playout estimate of the start position: {estimate:.1f}")

    def on_move(action: Action, state: TwoFortyEight) -> None:
        console.print(render_board(state, action))

    if show_board:
        console.print(render_board(game))

    agent = MCTSAgent(config=config, verbose=args.verbose)
    stats = agent.play_game(
        game,
        max_moves=args.max_moves,
        on_move=on_move if show_board else None,
    )
    stats["max_tile"] = game.max_tile()
    return stats


def print_summary(results: List[Dict[str, Any]]) -> None:
    """Print a table with one row per game and the mean score."""
    table = Table(title="Results")
    table.add_column("Game", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Moves", justify="right")
    table.add_column("Max tile", justify="right")
    table.add_column("Time (s)", justify="right")

    for i, stats in enumerate(results):
        table.add_row(
            str(i + 1),
            f"{stats['score']:g}",
            str(stats["moves"]),
            f"[{tile_style(stats['max_tile'])}]{stats['max_tile']}[/]",
            f"{stats['elapsed']:.1f}",
        )

    console.print(table)
    mean_score = sum(stats["score"] for stats in results) / len(results)
    console.print(f"Mean score: {mean_score:.1f}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = MCTSConfig(
            iterations=args.iterations,
            exploration_weight=args.exploration,
            ensemble_size=args.ensemble_size,
            time_per_move=args.time_per_move,
            seed=args.seed,
        )
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/] {e}")
        return 2

    logger.debug("Using %s", config)

    seeds = random.Random(args.seed)
    results = []
    try:
        if args.games == 1:
            results.append(play_one(args, config, args.seed, show_board=True))
        else:
            for _ in tqdm(range(args.games), desc="Games"):
                results.append(play_one(args, config, seeds.getrandbits(32), show_board=False))
    except KeyboardInterrupt:
        console.print("\nInterrupted by user.")

    if results:
        print_summary(results)
    return 0


if __name__ == "__main__":
    sys.exit(main())
