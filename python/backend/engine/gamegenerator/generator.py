"""Generates solvable sliding puzzle boards."""

from __future__ import annotations

import logging
import random

from backend.models.board import Board, neighbors

logger = logging.getLogger(__name__)


def shuffle_length(size: int) -> int:
    """Random-walk length for a board of the given size."""
    return max(200, 20 * size * size)


class GameGenerator:
    """Creates solvable puzzles by shuffling from the solved state."""

    @staticmethod
    def solved(size: int) -> Board:
        """Return the goal-state board (all tiles in order, blank bottom-right)."""
        return Board.goal(size)

    @staticmethod
    def scramble(
        board: Board,
        moves: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Scramble *board* in-place using random legal slides.

        Every step is a legal, reversible slide, so the result stays
        reachable from wherever the walk started.
        """
        rng = rng or random.Random()
        num_shuffles = shuffle_length(board.size) if moves is None else moves
        adj = neighbors(board.size)
        blank = board.blank_index
        prev: int | None = None

        for _ in range(num_shuffles):
            options = [c for c in adj[blank] if c != prev]
            target = rng.choice(options)
            board.tiles[blank], board.tiles[target] = (
                board.tiles[target],
                board.tiles[blank],
            )
            prev, blank = blank, target

    @staticmethod
    def generate(
        size: int,
        moves: int | None = None,
        rng: random.Random | None = None,
    ) -> Board:
        """Return a random *solvable* board of the given size."""
        rng = rng or random.Random()
        while True:
            board = GameGenerator.solved(size)
            GameGenerator.scramble(board, moves=moves, rng=rng)
            # Ensure the board is not already solved
            if not board.is_solved() or moves == 0:
                return board
            logger.debug("Shuffle landed on the goal layout; retrying.")
