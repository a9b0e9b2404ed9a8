"""
Monte Carlo Tree Search Agent.

This module provides the MCTSAgent class, a ready-to-use player that drives
an MCTSEnsemble with a wall-clock budget per move and can play a whole game:
search, pick the best action, apply it to the real game and resynchronise
the ensemble.
"""
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple
import json
import logging
import time

from mcts2048.core.game import Game
from mcts2048.mcts.config import MCTSConfig
from mcts2048.mcts.ensemble import MCTSEnsemble

logger = logging.getLogger(__name__)

MoveCallback = Callable[[Hashable, Game], None]


class MCTSAgent:
    """
    Monte Carlo Tree Search agent.

    The agent keeps one ensemble for the game it is playing and records
    statistics about every search it runs.
    """

    def __init__(
        self,
        config: Optional[MCTSConfig] = None,
        name: str = "MCTS Agent",
        verbose: bool = False
    ):
        """
        Initialize an MCTS agent.

        Args:
            config: MCTS configuration parameters
            name: Name of the agent
            verbose: Whether to log every search at INFO level
        """
        self.config = config or MCTSConfig()
        self.name = name
        self.verbose = verbose

        self.ensemble: Optional[MCTSEnsemble] = None

        # Statistics from the most recent search
        self.last_stats: Dict[str, Any] = {}

        # History of all actions and their statistics
        self.action_history: List[Tuple[Hashable, Dict[str, Any]]] = []

    def _reset_ensemble(self, game: Game) -> MCTSEnsemble:
        if self.ensemble is None:
            self.ensemble = MCTSEnsemble(
                game,
                ensemble_size=self.config.ensemble_size,
                seed=self.config.seed,
            )
        else:
            self.ensemble.advance_game(game)
        return self.ensemble

    def _search(self, ensemble: MCTSEnsemble) -> Optional[Hashable]:
        """
        Search until the time budget is spent and pick the best action.

        At least one search round always runs. Without a time budget exactly
        one round runs.
        """
        start_time = time.time()
        rounds = 0
        while True:
            ensemble.search(self.config.iterations, self.config.exploration_weight)
            rounds += 1
            elapsed = time.time() - start_time
            if self.config.time_per_move is None or elapsed >= self.config.time_per_move:
                break

        action = ensemble.best_action()

        stats = {
            "rounds": rounds,
            "iterations": ensemble.total_visits,
            "time_elapsed": elapsed,
            "iterations_per_second": ensemble.total_visits / max(0.001, elapsed),
            "action_votes": {str(a): votes for a, votes, _ in ensemble.action_votes()},
        }
        self.last_stats = stats
        if action is not None:
            self.action_history.append((action, stats))

        self._log_search_info(action, stats)
        return action

    def _log_search_info(self, action: Optional[Hashable], stats: Dict[str, Any]) -> None:
        level = logging.INFO if self.verbose else logging.DEBUG
        logger.log(
            level,
            "%s selected %s after %d iterations in %.3fs (%.1f it/s), votes=%s",
            self.name, action, stats["iterations"], stats["time_elapsed"],
            stats["iterations_per_second"], stats["action_votes"],
        )

    def select_action(self, game: Game) -> Optional[Hashable]:
        """
        Select an action for the given state using MCTS.

        Args:
            game: Current game state (not modified)

        Returns:
            Selected action, or None if the game is over
        """
        return self._search(self._reset_ensemble(game))

    def play_game(
        self,
        game: Game,
        max_moves: Optional[int] = None,
        on_move: Optional[MoveCallback] = None
    ) -> Dict[str, Any]:
        """
        Play a game until no action is recommended or `max_moves` is reached.

        The given game is the canonical state and is modified in place.

        Args:
            game: Game to play
            max_moves: Optional limit on the number of moves
            on_move: Called with (action, game) after every move

        Returns:
            Dictionary of game statistics
        """
        start_time = time.time()
        ensemble = self._reset_ensemble(game)
        actions: List[str] = []

        while max_moves is None or len(actions) < max_moves:
            action = self._search(ensemble)
            if action is None:
                break

            game.make_move(action)
            ensemble.advance_game(game)
            actions.append(str(action))

            if on_move is not None:
                on_move(action, game)

        stats = {
            "score": game.reward(),
            "moves": len(actions),
            "game_over": game.is_terminal(),
            "elapsed": time.time() - start_time,
            "actions": actions,
        }
        logger.info("%s finished: score=%g moves=%d", self.name, stats["score"], stats["moves"])
        return stats

    def get_last_statistics(self) -> Dict[str, Any]:
        """Get statistics from the most recent search."""
        return self.last_stats

    def reset_statistics(self) -> None:
        """Reset all statistics."""
        self.last_stats = {}
        self.action_history = []

    def save_statistics(self, filename: str) -> None:
        """
        Save statistics to a file.

        Args:
            filename: Name of the file to save to
        """
        # Convert actions to strings for JSON serialization
        history = [
            {"action": str(action), "stats": stats}
            for action, stats in self.action_history
        ]

        data = {
            "agent_name": self.name,
            "config": self.config.to_dict(),
            "history": history,
            "total_actions": len(self.action_history)
        }

        with open(filename, 'w') as f:
            json.dump(data, f, indent=2)

    def __str__(self) -> str:
        return (f"{self.name} (MCTS, {self.config.ensemble_size} trees, "
                f"{self.config.iterations} iterations/round)")
