from backend.engine.gameplay.game import GamePlay, GameResult

__all__ = ["GamePlay", "GameResult"]
