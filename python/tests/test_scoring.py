"""Score formula arithmetic."""

from __future__ import annotations

import pytest

from backend.engine.gamesolver.search import NOT_FOUND
from backend.engine.scoring import ScoreBasis, compute_score

ONE_AWAY = (1, 2, 3, 4, 5, 6, 7, 9, 8)


def _score(**overrides):
    kwargs = dict(
        moves=20,
        elapsed=40.0,
        hints=0,
        minimum_moves=20,
        initial_tiles=ONE_AWAY,
        size=3,
        seconds_per_move=2.0,
    )
    kwargs.update(overrides)
    return compute_score(**kwargs)


def test_perfect_game_scores_full_marks() -> None:
    b = _score()
    assert b.move_score == pytest.approx(70)
    assert b.time_score == pytest.approx(30)
    assert b.total == 100
    assert b.basis is ScoreBasis.OPTIMAL


def test_extra_moves_and_time_scale_down() -> None:
    b = _score(moves=40, elapsed=80.0)
    assert b.move_score == pytest.approx(35)
    assert b.time_score == pytest.approx(15)
    assert b.total == 50


def test_each_hint_costs_two_points() -> None:
    assert _score(hints=3).total == 94
    assert _score(hints=3).hint_penalty == 6


def test_score_never_negative() -> None:
    assert _score(moves=10_000, elapsed=10_000.0, hints=50).total == 0


def test_fallback_uses_heuristic_bound() -> None:
    b = _score(minimum_moves=NOT_FOUND, moves=1, elapsed=2.0)
    assert b.basis is ScoreBasis.HEURISTIC
    assert b.optimal == 1
    assert b.total == 100


def test_zero_moves_or_time_do_not_divide_by_zero() -> None:
    b = _score(moves=0, elapsed=0.0, minimum_moves=0)
    assert b.total == 100
