"""Tunable settings for search budgets, shuffling and scoring."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path

from backend.errors import ConfigError

# Larger boards get a smaller node cap: the state space grows
# combinatorially and the answer is needed within a human-facing deadline.
DEFAULT_NODE_CAPS: dict[int, int] = {
    3: 200_000,
    4: 100_000,
    5: 50_000,
}


@dataclass
class GameConfig:
    hint_timeout_ms: int = 2000
    min_moves_timeout_ms: int = 3000
    node_caps: dict[int, int] = field(
        default_factory=lambda: dict(DEFAULT_NODE_CAPS)
    )
    fallback_node_cap: int = 20_000
    shuffle_moves: int | None = None
    leaderboard_size: int = 10
    seconds_per_move: float = 2.0

    def node_cap(self, size: int) -> int:
        return self.node_caps.get(size, self.fallback_node_cap)

    # -- persistence ----------------------------------------------------------

    @classmethod
    def load(cls, filepath: Path | None, required: bool = False) -> GameConfig:
        """Build a config from defaults plus overrides in a JSON file.

        A missing path (or ``None``) yields the defaults, unless
        *required* is set, in which case a missing file is an error.
        """
        if filepath is None or not filepath.exists():
            if required:
                raise ConfigError(f"Config file {filepath} does not exist.")
            return cls()
        try:
            data = json.loads(filepath.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Cannot read config {filepath}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config {filepath} must hold a JSON object.")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(
                f"Unknown config keys in {filepath}: {', '.join(unknown)}"
            )

        for name, value in data.items():
            if name != "node_caps" and not _matches(name, value):
                raise ConfigError(
                    f"Config key {name!r} in {filepath} has invalid value {value!r}"
                )

        if "node_caps" in data:
            # JSON object keys are always strings.
            try:
                overrides = {int(k): v for k, v in data["node_caps"].items()}
            except (AttributeError, TypeError, ValueError) as exc:
                raise ConfigError(f"Invalid node_caps in {filepath}") from exc
            if not all(_matches("fallback_node_cap", v) for v in overrides.values()):
                raise ConfigError(f"Invalid node_caps in {filepath}")
            data["node_caps"] = {**DEFAULT_NODE_CAPS, **overrides}
        return cls(**data)


# JSON types accepted per scalar field.  ``bool`` is an ``int`` subclass
# and is rejected explicitly.
_FIELD_TYPES: dict[str, tuple[type, ...]] = {
    "hint_timeout_ms": (int,),
    "min_moves_timeout_ms": (int,),
    "fallback_node_cap": (int,),
    "shuffle_moves": (int, type(None)),
    "leaderboard_size": (int,),
    "seconds_per_move": (int, float),
}


def _matches(name: str, value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, _FIELD_TYPES[name]):
        return False
    return value is None or value >= 0  # type: ignore[operator]
