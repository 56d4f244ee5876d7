"""Exception types raised by the puzzle backend.

Search failures are *not* exceptions: the solver returns explicit
"not found" values.  These exceptions cover malformed input only.
"""

from __future__ import annotations


class PuzzleError(Exception):
    """Base class for every error raised by the backend."""


class InvalidBoardError(PuzzleError, ValueError):
    """A tile list is not a permutation of ``1..N²`` for its size."""


class ConfigError(PuzzleError):
    """A configuration file could not be read or holds unknown keys."""
