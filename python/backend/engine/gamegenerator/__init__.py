from backend.engine.gamegenerator.generator import GameGenerator, shuffle_length

__all__ = ["GameGenerator", "shuffle_length"]
