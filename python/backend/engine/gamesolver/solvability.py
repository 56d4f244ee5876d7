"""Parity test for whether an arrangement can reach the goal layout."""

from __future__ import annotations

from collections.abc import Sequence


def count_inversions(tiles: Sequence[int], blank: int) -> int:
    """Count pairs of real tiles that appear in the wrong relative order."""
    filtered = [v for v in tiles if v != blank]
    inversions = 0
    for i, a in enumerate(filtered):
        for b in filtered[i + 1 :]:
            if a > b:
                inversions += 1
    return inversions


def is_solvable(tiles: Sequence[int], blank: int, size: int) -> bool:
    """Return True if *tiles* can be slid back to the goal layout.

    Odd widths: the inversion count must be even.  Even widths: the
    inversion count plus the blank's row counted from the bottom (1 for
    the bottom row) must be odd.
    """
    inversions = count_inversions(tiles, blank)
    if size % 2 == 1:
        return inversions % 2 == 0
    blank_row_from_bottom = size - list(tiles).index(blank) // size
    return (inversions + blank_row_from_bottom) % 2 == 1
