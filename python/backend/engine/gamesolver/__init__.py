from backend.engine.gamesolver.search import (
    NOT_FOUND,
    HintMove,
    SearchLimits,
    SearchResult,
    SearchStatus,
    compute_minimum_moves,
    find_hint_move,
)
from backend.engine.gamesolver.solver import Solver

__all__ = [
    "NOT_FOUND",
    "HintMove",
    "SearchLimits",
    "SearchResult",
    "SearchStatus",
    "Solver",
    "compute_minimum_moves",
    "find_hint_move",
]
