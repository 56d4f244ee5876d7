"""Shared fixtures.

``distances_3x3`` is an exact breadth-first distance table over all
181,440 solvable 3×3 arrangements, built once per session.  Search
results are checked against it.
"""

from __future__ import annotations

import random
from collections import deque

import pytest

from backend.engine.gamegenerator import GameGenerator
from backend.models.board import goal_tiles, neighbors


def bfs_distances(size: int) -> dict[tuple[int, ...], int]:
    """Distance to goal for every arrangement reachable from the goal."""
    goal = goal_tiles(size)
    blank = size * size
    adj = neighbors(size)
    dist = {goal: 0}
    queue = deque([(goal, size * size - 1)])
    while queue:
        state, bi = queue.popleft()
        d = dist[state] + 1
        for cell in adj[bi]:
            nxt = list(state)
            nxt[bi], nxt[cell] = nxt[cell], blank
            key = tuple(nxt)
            if key not in dist:
                dist[key] = d
                queue.append((key, cell))
    return dist


@pytest.fixture(scope="session")
def distances_3x3() -> dict[tuple[int, ...], int]:
    return bfs_distances(3)


@pytest.fixture(scope="session")
def sample_3x3(distances_3x3) -> list[tuple[int, ...]]:
    """A reproducible spread of 3×3 boards, from trivial to the hardest."""
    rng = random.Random(1234)
    by_depth: dict[int, list[tuple[int, ...]]] = {}
    for state, d in distances_3x3.items():
        by_depth.setdefault(d, []).append(state)
    picked: list[tuple[int, ...]] = []
    for d in sorted(by_depth):
        states = sorted(by_depth[d])
        picked.extend(rng.sample(states, min(2, len(states))))
    return picked


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def shuffled_4x4(rng):
    """A lightly shuffled 4×4 board that A* finishes quickly."""
    return GameGenerator.generate(4, moves=30, rng=rng)
