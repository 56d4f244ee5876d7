"""Sliding puzzle solver."""

from __future__ import annotations

from backend.config import GameConfig
from backend.engine.gamesolver import search
from backend.engine.gamesolver.search import HintMove, SearchLimits
from backend.engine.gamesolver.solvability import is_solvable
from backend.models.board import Board, Direction, direction_of


class Solver:
    """Stateless solver — all methods are static.

    Every method works on a snapshot of the board, so the live board
    may keep changing while a search is running.
    """

    @staticmethod
    def hint(board: Board, config: GameConfig | None = None) -> HintMove | None:
        """Return the best next move, or ``None`` if solved / not found."""
        if board.is_solved():
            return None
        limits = SearchLimits.for_size(board.size, config=config)
        return search.find_hint_move(board.key, board.size, limits)

    @staticmethod
    def minimum_moves(
        board: Board,
        timeout_ms: int | None = None,
        config: GameConfig | None = None,
    ) -> int:
        """Optimal solution length, or ``search.NOT_FOUND``."""
        return search.compute_minimum_moves(
            board.key, board.size, timeout_ms=timeout_ms, config=config
        )

    @staticmethod
    def solve(board: Board, config: GameConfig | None = None) -> list[Direction]:
        """Return an optimal move sequence, or ``[]`` if solved / not found."""
        if board.is_solved():
            return []
        limits = SearchLimits.for_size(
            board.size,
            timeout_ms=(config or GameConfig()).min_moves_timeout_ms,
            config=config,
        )
        cells = search.solve_path(board.key, board.size, limits)
        if not cells:
            return []

        moves: list[Direction] = []
        blank = board.blank_index
        for cell in cells:
            moves.append(direction_of(blank, cell, board.size))
            blank = cell
        return moves

    @staticmethod
    def is_solvable(board: Board) -> bool:
        """Return True if *board* can reach the goal state."""
        return is_solvable(board.tiles, board.blank, board.size)
