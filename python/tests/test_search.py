"""A* search: optimality, hint moves, and resource bounds.

Exact answers come from the breadth-first distance table in
``conftest.py``.  Limits are generous so slow machines still finish;
budget exhaustion is tested separately with deliberately tiny limits.
"""

from __future__ import annotations

import logging

import pytest

from backend.config import GameConfig
from backend.engine.gamesolver import search
from backend.engine.gamesolver.heuristics import Heuristic
from backend.engine.gamesolver.search import (
    NOT_FOUND,
    HintMove,
    SearchLimits,
    SearchStatus,
    astar,
    compute_minimum_moves,
    find_hint_move,
    solve_path,
)
from backend.models.board import Board, Direction, goal_tiles, neighbors


GENEROUS = SearchLimits(max_nodes=1_000_000, timeout_ms=60_000)


def _apply(tiles, cell: int, size: int) -> tuple[int, ...]:
    state = list(tiles)
    bi = state.index(size * size)
    assert cell in neighbors(size)[bi], "hint is not a legal slide"
    state[bi], state[cell] = state[cell], state[bi]
    return tuple(state)


# -- trivial boards -----------------------------------------------------------


@pytest.mark.parametrize("size", [3, 4, 5, 6])
def test_goal_needs_zero_moves(size: int) -> None:
    assert compute_minimum_moves(goal_tiles(size), size) == 0


@pytest.mark.parametrize("size", [3, 4])
def test_goal_has_no_hint(size: int) -> None:
    assert find_hint_move(goal_tiles(size), size) is None


def test_one_move_from_goal_3x3() -> None:
    tiles = [1, 2, 3, 4, 5, 6, 7, 9, 8]
    assert compute_minimum_moves(tiles, 3) == 1
    assert find_hint_move(tiles, 3) == HintMove(cell=8, direction=Direction.LEFT)


def test_one_vertical_move_from_goal_3x3() -> None:
    tiles = [1, 2, 3, 4, 5, 9, 7, 8, 6]
    assert compute_minimum_moves(tiles, 3) == 1
    assert find_hint_move(tiles, 3) == HintMove(cell=8, direction=Direction.UP)


def test_hint_two_moves_from_goal_3x3() -> None:
    tiles = [1, 2, 3, 4, 5, 6, 9, 7, 8]
    assert compute_minimum_moves(tiles, 3) == 2
    assert find_hint_move(tiles, 3) == HintMove(cell=7, direction=Direction.LEFT)


def test_hint_direction_down_3x3() -> None:
    # Blank walked 8 → 7 → 4 → 5 → 8; undoing it starts with tile 8
    # dropping from cell 5 into the blank below it.
    tiles = [1, 2, 3, 4, 6, 8, 7, 5, 9]
    assert compute_minimum_moves(tiles, 3) == 4
    assert find_hint_move(tiles, 3) == HintMove(cell=5, direction=Direction.DOWN)


def test_hint_direction_right_3x3() -> None:
    # Blank walked 8 → 5 → 4 → 7 → 8; tile 6 at cell 7 slides back right.
    tiles = [1, 2, 3, 4, 8, 5, 7, 6, 9]
    assert compute_minimum_moves(tiles, 3) == 4
    assert find_hint_move(tiles, 3) == HintMove(cell=7, direction=Direction.RIGHT)


def test_hint_direction_up_4x4() -> None:
    board = Board.goal(4)
    board.slide(11)  # tile 12 moves down, blank goes up
    assert find_hint_move(board.tiles, 4) == HintMove(cell=15, direction=Direction.UP)

    board = Board.goal(4)
    board.slide(14)  # tile 15 moves right
    board.slide(10)  # tile 11 moves down
    assert compute_minimum_moves(board.tiles, 4) == 2
    assert find_hint_move(board.tiles, 4) == HintMove(cell=14, direction=Direction.UP)


# -- optimality ---------------------------------------------------------------


def test_minimum_moves_matches_bfs(sample_3x3, distances_3x3) -> None:
    config = GameConfig(node_caps={3: 1_000_000})
    for state in sample_3x3:
        got = compute_minimum_moves(state, 3, timeout_ms=60_000, config=config)
        assert got == distances_3x3[state], state


def test_manhattan_only_search_is_also_optimal(sample_3x3, distances_3x3) -> None:
    for state in sample_3x3[::4]:
        result = astar(state, 3, GENEROUS, heuristic=Heuristic.MANHATTAN)
        assert result.found
        assert result.cost == distances_3x3[state]


def test_hint_moves_one_step_closer(sample_3x3, distances_3x3) -> None:
    for state in sample_3x3:
        d = distances_3x3[state]
        hint = find_hint_move(state, 3, GENEROUS)
        if d == 0:
            assert hint is None
            continue
        assert hint is not None
        assert distances_3x3[_apply(state, hint.cell, 3)] == d - 1


def test_solve_path_replays_to_goal(sample_3x3, distances_3x3) -> None:
    state = max(sample_3x3, key=distances_3x3.__getitem__)
    path = solve_path(state, 3, GENEROUS)
    assert path is not None
    assert len(path) == distances_3x3[state]
    for cell in path:
        state = _apply(state, cell, 3)
    assert state == goal_tiles(3)


def test_linear_conflict_explores_no_more_than_manhattan(
    sample_3x3, distances_3x3
) -> None:
    state = max(sample_3x3, key=distances_3x3.__getitem__)
    lc = astar(state, 3, GENEROUS, heuristic=Heuristic.LINEAR_CONFLICT)
    md = astar(state, 3, GENEROUS, heuristic=Heuristic.MANHATTAN)
    assert lc.cost == md.cost
    assert lc.explored <= md.explored


def test_lightly_shuffled_4x4(shuffled_4x4) -> None:
    result = astar(shuffled_4x4.tiles, 4, GENEROUS)
    assert result.found
    assert result.cost is not None and result.cost <= 30
    assert result.cost % 2 == 30 % 2


def test_input_is_not_mutated() -> None:
    tiles = [1, 2, 3, 4, 5, 6, 9, 7, 8]
    find_hint_move(tiles, 3)
    compute_minimum_moves(tiles, 3)
    assert tiles == [1, 2, 3, 4, 5, 6, 9, 7, 8]


# -- resource bounds ----------------------------------------------------------


HARD_3X3 = (8, 6, 7, 2, 5, 4, 3, 9, 1)  # 31 moves, the 3×3 maximum


def test_node_cap_returns_not_found(caplog) -> None:
    limits = SearchLimits(max_nodes=5, timeout_ms=60_000)
    with caplog.at_level(logging.INFO, logger=search.__name__):
        result = astar(HARD_3X3, 3, limits)
    assert result.status is SearchStatus.NODE_LIMIT
    assert result.explored == 5
    assert result.cost is None
    assert "node_limit" in caplog.text
    assert find_hint_move(HARD_3X3, 3, limits) is None


def test_timeout_returns_not_found(caplog) -> None:
    limits = SearchLimits(max_nodes=1_000_000, timeout_ms=0)
    with caplog.at_level(logging.INFO, logger=search.__name__):
        result = astar(HARD_3X3, 3, limits)
    assert result.status is SearchStatus.TIMEOUT
    assert "timeout" in caplog.text
    assert compute_minimum_moves(HARD_3X3, 3, timeout_ms=0) == NOT_FOUND


def test_unsolvable_start_is_reported_not_searched(caplog) -> None:
    tiles = [2, 1, 3, 4, 5, 6, 7, 8, 9]
    with caplog.at_level(logging.ERROR, logger=search.__name__):
        result = astar(tiles, 3, GENEROUS)
    assert result.status is SearchStatus.UNSOLVABLE
    assert result.explored == 0
    assert "Unsolvable" in caplog.text
    assert compute_minimum_moves(tiles, 3) == NOT_FOUND
    assert find_hint_move(tiles, 3) is None


def test_limits_scale_down_with_size() -> None:
    caps = [SearchLimits.for_size(n).max_nodes for n in (3, 4, 5, 6, 8)]
    assert caps == sorted(caps, reverse=True)
    assert SearchLimits.for_size(3, timeout_ms=10).timeout_ms == 10
