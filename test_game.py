"""Tests for the 2048 game mechanics."""
import numpy as np
import pytest

from mcts2048.core.actions import Action
from mcts2048.core.constants import HEIGHT, WIDTH
from mcts2048.core.game import IllegalMoveError
from mcts2048.core.twofortyeight import TwoFortyEight, merge_line, shift_and_merge

EMPTY_ROWS = [[0] * WIDTH for _ in range(HEIGHT)]


def rows_with(*tiles):
    """Build board rows with (row, col, value) tiles set."""
    rows = [list(r) for r in EMPTY_ROWS]
    for row, col, value in tiles:
        rows[row][col] = value
    return rows


@pytest.mark.parametrize("line, expected, points", [
    ([2, 2, 2, 0], [4, 2, 0, 0], 4),
    ([2, 2, 4, 4], [4, 8, 0, 0], 12),
    ([2, 0, 4, 4], [2, 8, 0, 0], 8),
    ([2, 4, 2, 2], [2, 4, 4, 0], 4),
    ([0, 2], [2, 0], 0),
    ([2, 2], [4, 0], 4),
    ([0, 2, 0, 2, 0], [4, 0, 0, 0, 0], 4),
    ([2, 2, 2, 2, 2], [4, 4, 2, 0, 0], 8),
    ([1, 2, 2, 2, 4], [1, 4, 2, 4, 0], 4),
    ([2, 2, 4, 4, 4, 4], [4, 8, 8, 0, 0, 0], 20),
    ([4, 0, 0, 0, 0, 4], [8, 0, 0, 0, 0, 0], 8),
])
def test_merge_line(line, expected, points):
    merged, earned, changed = merge_line(line)
    assert merged == expected
    assert earned == points
    assert changed


@pytest.mark.parametrize("line", [[0], [2], [2, 8, 2], [2, 0], [0, 0, 0, 0], [4, 2, 4, 2]])
def test_merge_line_unchanged(line):
    merged, earned, changed = merge_line(line)
    assert merged == line
    assert earned == 0
    assert not changed


def test_shift_and_merge_walks_a_tile_around():
    game = TwoFortyEight.from_rows(rows_with((2, 2, 4)))

    for action in [Action.DOWN, Action.RIGHT, Action.UP, Action.LEFT]:
        board, points = shift_and_merge(game.board, action)
        assert points == 0
        game.board = board

    assert game.get_tile(0, 0) == 4
    assert int(game.board.sum()) == 4


def test_shift_and_merge_directions():
    board = np.array(rows_with((0, 0, 2), (0, 1, 2), (1, 0, 2)), dtype=np.uint32)

    left, points = shift_and_merge(board, Action.LEFT)
    assert left[0].tolist() == [4, 0, 0, 0]
    assert points == 4

    right, points = shift_and_merge(board, Action.RIGHT)
    assert right[0].tolist() == [0, 0, 0, 4]
    assert right[1].tolist() == [0, 0, 0, 2]

    up, points = shift_and_merge(board, Action.UP)
    assert up[:, 0].tolist() == [4, 0, 0, 0]
    assert up[0, 1] == 2
    assert points == 4

    down, points = shift_and_merge(board, Action.DOWN)
    assert down[:, 0].tolist() == [0, 0, 0, 4]
    assert down[3, 1] == 2


def test_large_tiles_merge_without_overflow():
    game = TwoFortyEight.from_rows(rows_with((0, 0, 32768), (0, 1, 32768), (0, 2, 2), (0, 3, 4)))

    assert Action.LEFT in game.allowed_actions()

    board, points = shift_and_merge(game.board, Action.LEFT)
    assert board[0].tolist() == [65536, 2, 4, 0]
    assert points == 65536

    merged, earned, changed = merge_line([32768, 32768, 0, 0])
    assert merged == [65536, 0, 0, 0]
    assert earned == 65536

    game.make_move(Action.LEFT)
    assert game.max_tile() == 65536


def test_shift_without_movement_returns_none():
    board = np.array(rows_with((0, 0, 2)), dtype=np.uint32)
    new_board, points = shift_and_merge(board, Action.LEFT)
    assert points is None
    assert (new_board == board).all()


def test_new_game():
    game = TwoFortyEight.new(seed=1)

    assert game.reward() == 0.0
    assert game.moves == 0
    assert int((game.board == 2).sum()) == 2


def test_setget_tile():
    game = TwoFortyEight.new_empty()
    coords = [(0, 1, 2), (2, 2, 4), (3, 1, 16)]

    for row, col, num in coords:
        game.set_tile(row, col, num)

    for row, col, num in coords:
        assert game.get_tile(row, col) == num
    assert game.max_tile() == 16


def test_random_spawn_until_full():
    game = TwoFortyEight.new_empty(seed=3)

    for _ in range(WIDTH * HEIGHT):
        assert not game.board_full()
        game.random_spawn()
    assert game.board_full()

    with pytest.raises(ValueError):
        game.random_spawn()


def test_allowed_actions_single_corner_tile():
    game = TwoFortyEight.from_rows(rows_with((0, 0, 2)))
    assert game.allowed_actions() == [Action.DOWN, Action.RIGHT]


def test_allowed_actions_is_idempotent():
    game = TwoFortyEight.new(seed=5)
    before = game.board.copy()

    assert game.allowed_actions() == game.allowed_actions()
    assert (game.board == before).all()


def test_locked_board_is_terminal():
    rows = [[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 2]]
    game = TwoFortyEight.from_rows(rows)

    assert game.allowed_actions() == []
    assert game.is_terminal()


def test_make_move_scores_and_spawns():
    game = TwoFortyEight.from_rows(rows_with((0, 0, 2), (0, 1, 2)), seed=0)

    game.make_move(Action.LEFT)

    assert game.reward() == 4.0
    assert game.moves == 1
    assert game.get_tile(0, 0) == 4
    assert int((game.board != 0).sum()) == 2


def test_illegal_move_raises():
    game = TwoFortyEight.from_rows(rows_with((0, 0, 2)))

    with pytest.raises(IllegalMoveError) as excinfo:
        game.make_move(Action.LEFT)
    assert excinfo.value.action is Action.LEFT
    assert game.moves == 0


def test_clone_is_independent_and_replays_spawns():
    game = TwoFortyEight.new(seed=11)
    clone = game.clone()

    clone.make_move(clone.allowed_actions()[0])
    assert game.moves == 0
    assert clone.moves == 1

    # Same randomness state: the original makes the same spawn
    game.make_move(game.allowed_actions()[0])
    assert (game.board == clone.board).all()


def test_seed_randomness_determinizes_spawns():
    first = TwoFortyEight.from_rows(rows_with((0, 0, 2)))
    second = TwoFortyEight.from_rows(rows_with((0, 0, 2)))
    first.seed_randomness(42)
    second.seed_randomness(42)

    for _ in range(5):
        action = first.allowed_actions()[-1]
        first.make_move(action)
        second.make_move(action)

    assert (first.board == second.board).all()


def test_from_rows_rejects_wrong_shape():
    with pytest.raises(ValueError):
        TwoFortyEight.from_rows([[2, 2], [2, 2]])


def test_display():
    game = TwoFortyEight.from_rows(rows_with((0, 1, 2), (2, 2, 4), (3, 1, 2048)))
    text = str(game)

    assert text.startswith("Moves=0 Score=0:")
    assert "2048" in text


def test_action_from_str():
    assert Action.from_str("left") is Action.LEFT
    assert Action.from_str(" UP ") is Action.UP
    with pytest.raises(ValueError):
        Action.from_str("sideways")
