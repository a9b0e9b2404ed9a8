"""Tests for the MCTS configuration, agent and command-line player."""
import json

import pytest

from mcts2048.core.twofortyeight import TwoFortyEight
from mcts2048.mcts import DEFAULT_CONFIG
from mcts2048.mcts.agent import MCTSAgent
from mcts2048.mcts.config import MCTSConfig
from mcts2048 import play


def quick_config(**overrides):
    params = dict(iterations=20, ensemble_size=3, time_per_move=None, seed=1)
    params.update(overrides)
    return MCTSConfig(**params)


# Configuration

@pytest.mark.parametrize("params", [
    {"iterations": 0},
    {"exploration_weight": -1.0},
    {"ensemble_size": 0},
    {"time_per_move": 0.0},
])
def test_config_validation(params):
    with pytest.raises(ValueError):
        MCTSConfig(**params)


def test_config_presets_are_valid():
    for config in [MCTSConfig.default(), MCTSConfig.fast(), MCTSConfig.deep(), DEFAULT_CONFIG]:
        assert config.iterations > 0
        assert config.ensemble_size > 0


def test_config_dict_round_trip():
    config = MCTSConfig(iterations=7, exploration_weight=0.5, ensemble_size=2, seed=3)
    data = config.to_dict()

    assert data["iterations"] == 7
    assert MCTSConfig.from_dict(data) == config
    assert MCTSConfig.from_dict({"iterations": 4, "unknown": True}).iterations == 4
    assert str(config).startswith("MCTSConfig(iterations=7")


# Agent

def test_select_action(two_choice_game):
    agent = MCTSAgent(config=quick_config())

    assert agent.select_action(two_choice_game) == "b"
    assert two_choice_game.choice is None

    stats = agent.get_last_statistics()
    assert stats["rounds"] == 1
    assert stats["iterations"] == 60
    assert stats["action_votes"] == {"b": 3}
    assert len(agent.action_history) == 1


def test_select_action_on_finished_game(two_choice_game):
    two_choice_game.make_move("a")
    agent = MCTSAgent(config=quick_config())

    assert agent.select_action(two_choice_game) is None
    assert agent.action_history == []


def test_time_budget_runs_until_spent(two_choice_game):
    agent = MCTSAgent(config=quick_config(iterations=1, time_per_move=0.05))
    agent.select_action(two_choice_game)

    stats = agent.get_last_statistics()
    assert stats["time_elapsed"] >= 0.05
    assert stats["rounds"] >= 1
    assert stats["iterations"] == stats["rounds"] * 3


def test_play_game(two_choice_game):
    agent = MCTSAgent(config=quick_config())
    moves = []

    stats = agent.play_game(two_choice_game, on_move=lambda action, game: moves.append(action))

    assert stats["score"] == 10.0
    assert stats["moves"] == 1
    assert stats["game_over"]
    assert stats["actions"] == ["b"]
    assert moves == ["b"]
    assert agent.ensemble.best_action() is None


def test_play_game_2048_respects_max_moves():
    game = TwoFortyEight.new(seed=0)
    agent = MCTSAgent(config=quick_config(iterations=2, ensemble_size=2))

    stats = agent.play_game(game, max_moves=3)

    assert stats["moves"] == 3
    assert game.moves == 3
    assert stats["score"] == game.reward()
    assert not stats["game_over"]
    assert "max_tile" not in stats


def test_statistics_can_be_saved_and_reset(two_choice_game, tmp_path):
    agent = MCTSAgent(config=quick_config(), name="Tester")
    agent.select_action(two_choice_game)

    path = tmp_path / "stats.json"
    agent.save_statistics(str(path))
    data = json.loads(path.read_text())

    assert data["agent_name"] == "Tester"
    assert data["total_actions"] == 1
    assert data["history"][0]["action"] == "b"
    assert data["config"]["ensemble_size"] == 3

    agent.reset_statistics()
    assert agent.get_last_statistics() == {}
    assert agent.action_history == []


# Command line

def test_cli_plays_several_games():
    argv = ["--games", "2", "-t", "0.01", "-e", "1", "-n", "2", "--max-moves", "2", "--seed", "3"]
    assert play.main(argv) == 0


def test_cli_single_game_with_rollouts():
    argv = ["-t", "0.01", "-e", "1", "-n", "1", "--max-moves", "1", "--seed", "5", "--rollouts", "2"]
    assert play.main(argv) == 0


def test_cli_rejects_bad_configuration():
    assert play.main(["-e", "0"]) == 2


def test_render_board():
    game = TwoFortyEight.from_rows([[2, 0, 0, 0], [0, 4, 0, 0], [0, 0, 2048, 0], [0, 0, 0, 4096]])
    table = play.render_board(game)

    assert table.row_count == 4
    assert "Score=0" in str(table.title)
    assert play.tile_style(4096) == "bold bright_blue"
