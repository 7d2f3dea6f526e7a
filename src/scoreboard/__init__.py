from src.scoreboard.ingestion import IngestionError, ScoreboardIngester
from src.scoreboard.models import Category, Problem, Scoreboard, Team, TeamScore
from src.scoreboard.transformation import ScoreboardBuilder, ScoreboardProvider

__all__ = [
    "Category",
    "IngestionError",
    "Problem",
    "Scoreboard",
    "ScoreboardBuilder",
    "ScoreboardIngester",
    "ScoreboardProvider",
    "Team",
    "TeamScore",
]
