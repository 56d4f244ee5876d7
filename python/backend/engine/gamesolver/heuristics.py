"""Admissible cost-to-go estimates for the sliding puzzle."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Callable, Sequence
from enum import StrEnum


def manhattan(tiles: Sequence[int], size: int) -> int:
    """Sum of grid distances between each tile and its goal cell."""
    blank = size * size
    h = 0
    for i, v in enumerate(tiles):
        if v == blank:
            continue
        goal = v - 1
        h += abs(i // size - goal // size) + abs(i % size - goal % size)
    return h


def _line_penalty(goal_order: list[int]) -> int:
    """Extra moves forced by tiles out of order within one line.

    Every tile outside the longest in-order subsequence has to step out
    of the line and back, costing two moves beyond its Manhattan
    distance.  For a single inverted pair this is exactly 2.
    """
    if len(goal_order) < 2:
        return 0
    tails: list[int] = []
    for g in goal_order:
        i = bisect_left(tails, g)
        if i == len(tails):
            tails.append(g)
        else:
            tails[i] = g
    return 2 * (len(goal_order) - len(tails))


def linear_conflict(tiles: Sequence[int], size: int) -> int:
    """Linear-conflict correction only (add to ``manhattan``)."""
    blank = size * size
    extra = 0
    for line in range(size):
        # Row: tiles already in their goal row, keyed by goal column.
        row_goals: list[int] = []
        for c in range(size):
            v = tiles[line * size + c]
            if v != blank and (v - 1) // size == line:
                row_goals.append((v - 1) % size)
        extra += _line_penalty(row_goals)

        col_goals: list[int] = []
        for r in range(size):
            v = tiles[r * size + line]
            if v != blank and (v - 1) % size == line:
                col_goals.append((v - 1) // size)
        extra += _line_penalty(col_goals)
    return extra


def manhattan_linear_conflict(tiles: Sequence[int], size: int) -> int:
    return manhattan(tiles, size) + linear_conflict(tiles, size)


HeuristicFn = Callable[[Sequence[int], int], int]


class Heuristic(StrEnum):
    MANHATTAN = "manhattan"
    LINEAR_CONFLICT = "linear_conflict"

    @property
    def fn(self) -> HeuristicFn:
        if self is Heuristic.MANHATTAN:
            return manhattan
        return manhattan_linear_conflict
