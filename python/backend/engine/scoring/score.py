"""Final score for a completed game.

The weights are product policy: moves are worth up to 70 points, time
up to 30, and every hint costs 2.  ``optimal`` normalises the move and
time parts; when the exact optimum could not be computed, the admissible
heuristic bound of the initial layout stands in for it.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from backend.engine.gamesolver.heuristics import manhattan_linear_conflict
from backend.engine.gamesolver.search import NOT_FOUND

MOVE_POINTS = 70
TIME_POINTS = 30
HINT_PENALTY = 2
MAX_SCORE = MOVE_POINTS + TIME_POINTS


class ScoreBasis(StrEnum):
    OPTIMAL = "optimal"
    HEURISTIC = "heuristic"


@dataclass(frozen=True)
class ScoreBreakdown:
    move_score: float
    time_score: float
    hint_penalty: int
    total: int
    optimal: int
    basis: ScoreBasis


def move_score(optimal: int, moves: int) -> float:
    if moves <= 0:
        return float(MOVE_POINTS)
    return MOVE_POINTS * min(1.0, optimal / moves)


def time_score(optimal: int, elapsed: float, seconds_per_move: float) -> float:
    if elapsed <= 0:
        return float(TIME_POINTS)
    par = seconds_per_move * optimal
    return TIME_POINTS * min(1.0, par / elapsed)


def compute_score(
    *,
    moves: int,
    elapsed: float,
    hints: int,
    minimum_moves: int,
    initial_tiles: Sequence[int],
    size: int,
    seconds_per_move: float = 2.0,
) -> ScoreBreakdown:
    """Score a finished game; ``minimum_moves`` may be ``NOT_FOUND``."""
    if minimum_moves == NOT_FOUND:
        optimal = manhattan_linear_conflict(initial_tiles, size)
        basis = ScoreBasis.HEURISTIC
    else:
        optimal = minimum_moves
        basis = ScoreBasis.OPTIMAL

    ms = move_score(optimal, moves)
    ts = time_score(optimal, elapsed, seconds_per_move)
    penalty = HINT_PENALTY * hints
    total = max(0, min(MAX_SCORE, round(ms + ts - penalty)))
    return ScoreBreakdown(
        move_score=ms,
        time_score=ts,
        hint_penalty=penalty,
        total=total,
        optimal=optimal,
        basis=basis,
    )
