"""Core gameplay logic — processes moves, hints, and the final score."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime, timezone

from backend.config import GameConfig
from backend.engine.gamegenerator import GameGenerator
from backend.engine.gamesolver import HintMove, Solver
from backend.engine.gamestate import GameState
from backend.engine.scoring import ScoreBreakdown, compute_score
from backend.models.board import Board, Direction
from backend.models.highscore import LeaderboardEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameResult:
    breakdown: ScoreBreakdown
    entry: LeaderboardEntry


class GamePlay:
    """Orchestrates a single game session."""

    def __init__(
        self,
        size: int,
        config: GameConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.size = size
        self.config = config or GameConfig()
        board = GameGenerator.generate(
            size, moves=self.config.shuffle_moves, rng=rng
        )
        self.state = GameState(board)
        self.hint: HintMove | None = None

    @classmethod
    def from_board(cls, board: Board, config: GameConfig | None = None) -> GamePlay:
        """Create a game session from an existing board (e.g. loaded from file)."""
        obj = object.__new__(cls)
        obj.size = board.size
        obj.config = config or GameConfig()
        obj.state = GameState(board)
        obj.hint = None
        return obj

    def start(self) -> None:
        self.state.start()

    # -- movement (direction = where the *tile* moves) ------------------------

    def move(self, direction: Direction) -> bool:
        """Slide a tile in *direction* into the adjacent blank.

        E.g. ``Direction.UP`` moves the tile **below** the blank upward.
        Returns True if the move was valid.
        """
        board = self.state.board
        bi = board.blank_index
        br, bc = divmod(bi, self.size)

        # The offset points to the tile that will slide into the blank.
        # UP   → tile at (br+1, bc) moves up   → blank shifts down
        # DOWN → tile at (br-1, bc) moves down  → blank shifts up
        # LEFT → tile at (br, bc+1) moves left  → blank shifts right
        # RIGHT→ tile at (br, bc-1) moves right → blank shifts left
        offsets = {
            Direction.UP: (1, 0),
            Direction.DOWN: (-1, 0),
            Direction.LEFT: (0, 1),
            Direction.RIGHT: (0, -1),
        }
        dr, dc = offsets[direction]
        tr, tc = br + dr, bc + dc

        if not (0 <= tr < self.size and 0 <= tc < self.size):
            return False
        return self.move_tile(tr * self.size + tc)

    def move_tile(self, cell: int) -> bool:
        """Move the tile at *cell* into the adjacent blank.

        Returns True if the game is running (started, not yet finished),
        the tile was adjacent to the blank, and the move was applied.
        """
        if not self.state.started or self.state.finished:
            return False
        if not self.state.board.slide(cell):
            return False
        self.hint = None
        self.state.increment_moves()
        return True

    def restart(self) -> None:
        """Return the tiles to the shuffled start; counters and clock continue."""
        self.state.reset_board()
        self.hint = None

    # -- hints ----------------------------------------------------------------

    def request_hint(self) -> HintMove | None:
        """Compute a hint for the current board.

        The hint counter only goes up when a move is actually found.
        """
        if not self.state.started or self.is_won:
            return None
        hint = Solver.hint(self.state.board.copy(), self.config)
        if hint is None:
            logger.warning(
                "No hint found for %dx%d board within budget", self.size, self.size
            )
            return None
        self.hint = hint
        self.state.increment_hints()
        return hint

    # -- queries --------------------------------------------------------------

    @property
    def is_won(self) -> bool:
        return self.state.is_solved and self.state.moves > 0

    def finish(self) -> GameResult:
        """Stop the clock and score the game against the shuffled start."""
        self.state.pause()
        self.state.finished = True
        initial = Board(size=self.size, tiles=list(self.state.initial_tiles))
        minimum = Solver.minimum_moves(
            initial, self.config.min_moves_timeout_ms, self.config
        )
        breakdown = compute_score(
            moves=self.state.moves,
            elapsed=self.state.elapsed_time,
            hints=self.state.hints,
            minimum_moves=minimum,
            initial_tiles=self.state.initial_tiles,
            size=self.size,
            seconds_per_move=self.config.seconds_per_move,
        )
        entry = LeaderboardEntry(
            time=round(self.state.elapsed_time, 2),
            moves=self.state.moves,
            hints=self.state.hints,
            score=breakdown.total,
            date=datetime.now(timezone.utc).isoformat(timespec="seconds"),
        )
        return GameResult(breakdown=breakdown, entry=entry)
