from pydantic import BaseModel

from .exercise_schema import ExerciseCreate, ExerciseUpdate, ExerciseResponse, ExerciseEnvelope
from .ranking_schema import RankingEntry, RankingResponse


class AppInfo(BaseModel):
    app_name: str = "GymRank"
    version: str = "1.0.0"
    description: str = "Log your exercises and compete on a rolling 29 day leaderboard."


__all__ = [
    "AppInfo",
    "ExerciseCreate",
    "ExerciseUpdate",
    "ExerciseResponse",
    "ExerciseEnvelope",
    "RankingEntry",
    "RankingResponse",
]
