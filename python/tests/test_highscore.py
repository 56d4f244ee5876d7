"""Leaderboard persistence and ordering."""

from __future__ import annotations

import json
from pathlib import Path

from backend.models.highscore import Leaderboard, LeaderboardEntry


def _entry(score: int, time: float = 30.0) -> LeaderboardEntry:
    return LeaderboardEntry(
        time=time, moves=40, hints=1, score=score, date="2026-01-01T00:00:00+00:00"
    )


def test_orders_by_score_then_time(tmp_path: Path) -> None:
    board = Leaderboard(tmp_path / "lb.json")
    board.add(3, _entry(50, 20.0))
    board.add(3, _entry(80, 90.0))
    board.add(3, _entry(80, 45.0))
    assert [(e.score, e.time) for e in board.entries(3)] == [
        (80, 45.0),
        (80, 90.0),
        (50, 20.0),
    ]


def test_add_returns_rank_and_caps_top_k(tmp_path: Path) -> None:
    board = Leaderboard(tmp_path / "lb.json", limit=3)
    for s in (10, 20, 30):
        board.add(4, _entry(s))
    assert board.add(4, _entry(25)) == 2
    assert board.add(4, _entry(5)) is None
    assert [e.score for e in board.entries(4)] == [30, 25, 20]


def test_sizes_are_tracked_separately(tmp_path: Path) -> None:
    board = Leaderboard(tmp_path / "lb.json")
    board.add(4, _entry(10))
    board.add(3, _entry(20))
    assert board.sizes() == [3, 4]
    assert board.entries(5) == []


def test_round_trips_through_json(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "lb.json"
    Leaderboard(path).add(3, _entry(70))
    data = json.loads(path.read_text())
    assert data["3"][0]["score"] == 70
    assert Leaderboard(path).entries(3) == [_entry(70)]


def test_corrupt_file_is_treated_as_empty(tmp_path: Path, caplog) -> None:
    path = tmp_path / "lb.json"
    path.write_text("{not json")
    board = Leaderboard(path)
    assert board.sizes() == []
    assert "unreadable leaderboard" in caplog.text
