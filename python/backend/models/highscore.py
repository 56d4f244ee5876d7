"""Leaderboard persistence and management."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class LeaderboardEntry:
    time: float
    moves: int
    hints: int
    score: int
    date: str


class Leaderboard:
    """Loads, saves, and queries the per-size top-K results in a JSON file.

    Entries are ordered by score (highest first), then time (fastest
    first).  Only the best ``limit`` entries per size are kept.
    """

    def __init__(self, filepath: Path, limit: int = 10) -> None:
        self.filepath = filepath
        self.limit = limit
        self._entries: dict[str, list[LeaderboardEntry]] = {}
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        if not self.filepath.exists():
            return
        try:
            data = json.loads(self.filepath.read_text())
            for size_key, entries in data.items():
                self._entries[size_key] = [
                    LeaderboardEntry(**e) for e in entries
                ]
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.warning(
                "Ignoring unreadable leaderboard %s: %s", self.filepath, exc
            )
            self._entries = {}

    def save(self) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        data = {
            size_key: [asdict(e) for e in entries]
            for size_key, entries in self._entries.items()
        }
        self.filepath.write_text(json.dumps(data, indent=2) + "\n")

    # -- queries --------------------------------------------------------------

    def add(self, size: int, entry: LeaderboardEntry) -> int | None:
        """Record *entry*; return its 1-based rank, or None if it missed the cut."""
        key = str(size)
        entries = self._entries.setdefault(key, [])
        entries.append(entry)
        entries.sort(key=lambda e: (-e.score, e.time))
        del entries[self.limit :]
        self.save()
        for rank, e in enumerate(entries, 1):
            if e is entry:
                return rank
        return None

    def entries(self, size: int) -> list[LeaderboardEntry]:
        return list(self._entries.get(str(size), []))

    def sizes(self) -> list[int]:
        return sorted(int(k) for k in self._entries if self._entries[k])
