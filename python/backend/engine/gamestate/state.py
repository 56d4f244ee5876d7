"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import time

from backend.models.board import Board


class GameState:
    """Holds the current board, the shuffled start, counters, and elapsed time.

    The clock does not run until ``start()`` is called.
    """

    def __init__(self, board: Board) -> None:
        self.board = board
        self.initial_tiles: tuple[int, ...] = board.key
        self.moves: int = 0
        self.hints: int = 0
        self.started: bool = False
        self.finished: bool = False
        self._start_time: float = 0.0
        self._elapsed_banked: float = 0.0
        self._running: bool = False

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    def start(self) -> None:
        if not self.started:
            self.started = True
            self.resume()

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    def resume(self) -> None:
        if self.started and not self._running:
            self._start_time = time.time()
            self._running = True

    # -- counters -------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    def increment_hints(self) -> None:
        self.hints += 1

    def reset_board(self) -> None:
        """Put the tiles back in the shuffled start layout."""
        self.board = Board(size=self.board.size, tiles=list(self.initial_tiles))

    @property
    def is_solved(self) -> bool:
        return self.board.is_solved()
