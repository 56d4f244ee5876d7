"""Board model for the sliding puzzle game."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from functools import lru_cache

from backend.errors import InvalidBoardError


class Direction(StrEnum):
    """Direction a *tile* travels when it slides into the blank."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def arrow(self) -> str:
        return _ARROWS[self]


_ARROWS = {
    Direction.UP: "↑",
    Direction.DOWN: "↓",
    Direction.LEFT: "←",
    Direction.RIGHT: "→",
}


# -- pure helpers on flat tile sequences ---------------------------------------


def blank_label(size: int) -> int:
    """The label standing in for the blank cell: ``size * size``."""
    return size * size


def goal_tiles(size: int) -> tuple[int, ...]:
    return tuple(range(1, size * size + 1))


@lru_cache(maxsize=None)
def neighbors(size: int) -> tuple[tuple[int, ...], ...]:
    """Grid-adjacent cells (left, right, up, down) for every cell index."""
    adj: list[tuple[int, ...]] = []
    for i in range(size * size):
        r, c = divmod(i, size)
        nb: list[int] = []
        if c > 0:
            nb.append(i - 1)
        if c < size - 1:
            nb.append(i + 1)
        if r > 0:
            nb.append(i - size)
        if r < size - 1:
            nb.append(i + size)
        adj.append(tuple(nb))
    return tuple(adj)


def is_goal(tiles: Sequence[int]) -> bool:
    """True iff every non-final cell holds its own label."""
    return all(tiles[i] == i + 1 for i in range(len(tiles) - 1))


def board_key(tiles: Sequence[int]) -> tuple[int, ...]:
    """Hashable, totally ordered key identifying one arrangement."""
    return tuple(tiles)


def direction_of(blank: int, cell: int, size: int) -> Direction:
    """Direction the tile at *cell* travels when slid into *blank*."""
    delta = blank - cell
    if delta == 1 and blank % size != 0:
        return Direction.RIGHT
    if delta == -1 and cell % size != 0:
        return Direction.LEFT
    if delta == size:
        return Direction.DOWN
    if delta == -size:
        return Direction.UP
    raise ValueError(f"Cell {cell} is not adjacent to blank {blank}.")


def validate_tiles(size: int, tiles: Sequence[int]) -> None:
    """Raise ``InvalidBoardError`` unless *tiles* is a permutation of 1..N²."""
    if size < 2:
        raise InvalidBoardError(f"Board size must be at least 2, got {size}.")
    if len(tiles) != size * size:
        raise InvalidBoardError(
            f"Expected {size * size} tiles for a {size}×{size} board, "
            f"got {len(tiles)}."
        )
    if sorted(tiles) != list(range(1, size * size + 1)):
        raise InvalidBoardError(
            f"Tiles must be a permutation of 1..{size * size} "
            f"(blank = {size * size})."
        )


# -- board --------------------------------------------------------------------


@dataclass
class Board:
    """Represents the sliding puzzle board.

    Tiles are stored as a flat row-major list of labels.  The label
    ``size * size`` represents the blank space; the goal layout is
    ``[1, 2, ..., size * size]``.
    """

    size: int
    tiles: list[int]

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_flat(cls, size: int, flat: Sequence[int]) -> Board:
        """Create a board from a flat row-major tile list.

        Example::

            Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, 9, 8])
        """
        validate_tiles(size, flat)
        return cls(size=size, tiles=list(flat))

    @classmethod
    def goal(cls, size: int) -> Board:
        return cls(size=size, tiles=list(goal_tiles(size)))

    # -- queries --------------------------------------------------------------

    @property
    def blank(self) -> int:
        return blank_label(self.size)

    @property
    def blank_index(self) -> int:
        return self.tiles.index(self.blank)

    @property
    def key(self) -> tuple[int, ...]:
        return board_key(self.tiles)

    def movable_cells(self) -> tuple[int, ...]:
        return neighbors(self.size)[self.blank_index]

    def is_solved(self) -> bool:
        return is_goal(self.tiles)

    def is_tile_correct(self, cell: int) -> bool:
        """Check if the tile at *cell* sits in its goal position."""
        return self.tiles[cell] == cell + 1

    def copy(self) -> Board:
        return Board(size=self.size, tiles=self.tiles[:])

    # -- mutation -------------------------------------------------------------

    def slide(self, cell: int) -> bool:
        """Slide the tile at *cell* into the adjacent blank.

        Returns False (and leaves the board untouched) when *cell* is
        not next to the blank.
        """
        bi = self.blank_index
        if cell not in neighbors(self.size)[bi]:
            return False
        self.tiles[bi], self.tiles[cell] = self.tiles[cell], self.tiles[bi]
        return True

    def __str__(self) -> str:
        width = len(str(self.size * self.size - 1))
        rows = []
        for r in range(self.size):
            row = self.tiles[r * self.size : (r + 1) * self.size]
            rows.append(
                " ".join(
                    "." * width if v == self.blank else f"{v:>{width}}"
                    for v in row
                )
            )
        return "\n".join(rows)
