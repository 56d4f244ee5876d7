from backend.engine.scoring.score import ScoreBasis, ScoreBreakdown, compute_score

__all__ = ["ScoreBasis", "ScoreBreakdown", "compute_score"]
