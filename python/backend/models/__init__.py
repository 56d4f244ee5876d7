from backend.models.board import Board, Direction
from backend.models.highscore import Leaderboard, LeaderboardEntry

__all__ = ["Board", "Direction", "Leaderboard", "LeaderboardEntry"]
