"""A* search over sliding-puzzle states.

Nodes are board arrangements, edges are single legal slides of cost 1.
Every call is a closed episode: the open heap, cost map and closed set
live only for the duration of one call.  Each call is bounded by a node
cap and a wall-clock deadline and reports a ``SearchStatus`` instead of
raising when it gives up.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from backend.config import GameConfig
from backend.engine.gamesolver.heuristics import Heuristic, HeuristicFn
from backend.engine.gamesolver.solvability import is_solvable
from backend.models.board import (
    Direction,
    blank_label,
    board_key,
    direction_of,
    is_goal,
    neighbors,
    validate_tiles,
)

logger = logging.getLogger(__name__)

NOT_FOUND = -1

# The clock is polled every N expansions rather than on every pop.
_DEADLINE_CHECK_EVERY = 64


class SearchStatus(StrEnum):
    FOUND = "found"
    TIMEOUT = "timeout"
    NODE_LIMIT = "node_limit"
    EXHAUSTED = "exhausted"
    UNSOLVABLE = "unsolvable"


@dataclass(frozen=True)
class SearchLimits:
    """Resource bounds for one search call."""

    max_nodes: int
    timeout_ms: int

    @classmethod
    def for_size(
        cls,
        size: int,
        timeout_ms: int | None = None,
        config: GameConfig | None = None,
    ) -> SearchLimits:
        config = config or GameConfig()
        return cls(
            max_nodes=config.node_cap(size),
            timeout_ms=config.hint_timeout_ms if timeout_ms is None else timeout_ms,
        )


@dataclass(frozen=True)
class HintMove:
    """The cell to slide next, and which way its tile travels."""

    cell: int
    direction: Direction


@dataclass
class SearchResult:
    status: SearchStatus
    cost: int | None = None
    path: list[int] = field(default_factory=list)
    explored: int = 0
    elapsed: float = 0.0

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND


@dataclass(slots=True)
class _Node:
    state: tuple[int, ...]
    blank: int
    g: int
    parent: _Node | None = None
    moved_from: int | None = None


def _reconstruct(node: _Node) -> list[int]:
    """Cells moved, in order from the root to *node*."""
    cells: list[int] = []
    while node.parent is not None:
        cells.append(node.moved_from)  # type: ignore[arg-type]
        node = node.parent
    cells.reverse()
    return cells


# -- engine -------------------------------------------------------------------


def astar(
    tiles: Sequence[int],
    size: int,
    limits: SearchLimits,
    heuristic: Heuristic = Heuristic.LINEAR_CONFLICT,
) -> SearchResult:
    """Search for a shortest slide sequence from *tiles* to the goal.

    Open nodes are popped in non-decreasing ``f = g + h`` order, ties
    broken by smaller ``h`` and then insertion order.  A state whose
    best known cost improves after it was expanded is reopened, so the
    first goal pop is optimal for any admissible heuristic.
    """
    validate_tiles(size, tiles)
    started = time.monotonic()
    deadline = started + limits.timeout_ms / 1000.0
    blank = blank_label(size)
    start = board_key(tiles)

    if is_goal(start):
        return SearchResult(SearchStatus.FOUND, cost=0)

    if not is_solvable(start, blank, size):
        logger.error(
            "Unsolvable %dx%d board passed to search: %s. "
            "A non-slide move was applied somewhere.",
            size, size, ",".join(map(str, start)),
        )
        return SearchResult(SearchStatus.UNSOLVABLE)

    h_fn: HeuristicFn = heuristic.fn
    adj = neighbors(size)
    counter = itertools.count()

    root = _Node(state=start, blank=start.index(blank), g=0)
    h0 = h_fn(start, size)
    open_heap: list[tuple[int, int, int, _Node]] = [(h0, h0, next(counter), root)]
    best_g: dict[tuple[int, ...], int] = {start: 0}
    closed: set[tuple[int, ...]] = set()
    explored = 0

    def _give_up(status: SearchStatus) -> SearchResult:
        elapsed = time.monotonic() - started
        logger.info(
            "A* gave up on %dx%d board (%s) after %d nodes in %.3fs",
            size, size, status.value, explored, elapsed,
        )
        return SearchResult(status, explored=explored, elapsed=elapsed)

    while open_heap:
        if explored % _DEADLINE_CHECK_EVERY == 0 and time.monotonic() >= deadline:
            return _give_up(SearchStatus.TIMEOUT)

        _, _, _, node = heapq.heappop(open_heap)
        # Skip duplicates already expanded at this cost, and stale copies
        # superseded by a cheaper path.
        if node.state in closed or node.g > best_g[node.state]:
            continue

        if is_goal(node.state):
            elapsed = time.monotonic() - started
            logger.debug(
                "A* solved %dx%d board: %d moves, %d nodes, %.3fs",
                size, size, node.g, explored, elapsed,
            )
            return SearchResult(
                SearchStatus.FOUND,
                cost=node.g,
                path=_reconstruct(node),
                explored=explored,
                elapsed=elapsed,
            )

        if explored >= limits.max_nodes:
            return _give_up(SearchStatus.NODE_LIMIT)

        closed.add(node.state)
        explored += 1

        g2 = node.g + 1
        for cell in adj[node.blank]:
            nxt = list(node.state)
            nxt[node.blank], nxt[cell] = nxt[cell], blank
            key = tuple(nxt)
            if g2 >= best_g.get(key, g2 + 1):
                continue
            best_g[key] = g2
            closed.discard(key)
            h2 = h_fn(key, size)
            child = _Node(
                state=key, blank=cell, g=g2, parent=node, moved_from=cell
            )
            heapq.heappush(open_heap, (g2 + h2, h2, next(counter), child))

    # Unreachable for a solvable start; the open set ran dry regardless.
    logger.error(
        "A* exhausted the open set on a %dx%d board after %d nodes",
        size, size, explored,
    )
    return SearchResult(
        SearchStatus.EXHAUSTED,
        explored=explored,
        elapsed=time.monotonic() - started,
    )


# -- public operations --------------------------------------------------------


def find_hint_move(
    tiles: Sequence[int],
    size: int,
    limits: SearchLimits | None = None,
) -> HintMove | None:
    """Return the first move of an optimal solution, or ``None``.

    ``None`` means the board is already solved or the search ran out of
    budget; the caller decides how to tell the user.
    """
    limits = limits or SearchLimits.for_size(size)
    snapshot = tuple(tiles)
    result = astar(snapshot, size, limits)
    if not result.found or not result.path:
        return None
    first = result.path[0]
    blank = snapshot.index(blank_label(size))
    return HintMove(cell=first, direction=direction_of(blank, first, size))


def compute_minimum_moves(
    tiles: Sequence[int],
    size: int,
    timeout_ms: int | None = None,
    config: GameConfig | None = None,
) -> int:
    """Return the optimal number of moves to solve *tiles*, or ``NOT_FOUND``."""
    config = config or GameConfig()
    limits = SearchLimits.for_size(
        size,
        timeout_ms=config.min_moves_timeout_ms if timeout_ms is None else timeout_ms,
        config=config,
    )
    result = astar(tuple(tiles), size, limits)
    if not result.found or result.cost is None:
        return NOT_FOUND
    return result.cost


def solve_path(
    tiles: Sequence[int],
    size: int,
    limits: SearchLimits | None = None,
) -> list[int] | None:
    """Return the full optimal list of cells to slide, or ``None``."""
    limits = limits or SearchLimits.for_size(size)
    result = astar(tuple(tiles), size, limits)
    return result.path if result.found else None
