"""
Configuration for Monte Carlo Tree Search (MCTS).

This module defines the configuration parameters for the MCTS engine,
including the iteration budget, exploration constant, ensemble size and
time budget per move.
"""
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional


@dataclass
class MCTSConfig:
    """
    Configuration parameters for Monte Carlo Tree Search.

    This class defines all tunable parameters for the engine,
    with validation and sensible defaults.
    """
    # Search parameters
    iterations: int = 10
    """Number of iterations run on every tree per search call"""

    exploration_weight: float = 1.0
    """UCT1 exploration constant c"""

    # Ensemble parameters
    ensemble_size: int = 10
    """Number of independent search trees"""

    # Budget
    time_per_move: Optional[float] = 1.0
    """Wall-clock budget per move in seconds (None = a single search call)"""

    seed: Optional[int] = None
    """Seed for the search randomness (None = nondeterministic)"""

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.iterations <= 0:
            raise ValueError("iterations must be positive")

        if self.exploration_weight < 0:
            raise ValueError("exploration_weight must be non-negative")

        if self.ensemble_size <= 0:
            raise ValueError("ensemble_size must be positive")

        if self.time_per_move is not None and self.time_per_move <= 0:
            raise ValueError("time_per_move must be positive or None")

    @classmethod
    def default(cls) -> 'MCTSConfig':
        """
        Get the default configuration.

        Returns:
            Default MCTSConfig object
        """
        return cls()

    @classmethod
    def fast(cls) -> 'MCTSConfig':
        """
        Get a configuration for quick games: a small ensemble and a fixed
        iteration budget instead of a clock.

        Returns:
            Fast MCTSConfig object
        """
        return cls(
            iterations=50,
            ensemble_size=2,
            time_per_move=None,
        )

    @classmethod
    def deep(cls) -> 'MCTSConfig':
        """
        Get a configuration for stronger, slower play.

        Returns:
            Deep MCTSConfig object
        """
        return cls(
            iterations=25,
            exploration_weight=1.0,
            ensemble_size=20,
            time_per_move=5.0,
        )

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'MCTSConfig':
        """
        Create a configuration from a dictionary.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            MCTSConfig object
        """
        # Filter out any keys that aren't valid parameters
        valid_params = {k: v for k, v in config_dict.items()
                        if k in cls.__dataclass_fields__}
        return cls(**valid_params)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the configuration to a dictionary.

        Returns:
            Dictionary of configuration parameters
        """
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def __str__(self) -> str:
        params = ", ".join(f"{name}={value}" for name, value in self.to_dict().items())
        return f"MCTSConfig({params})"
