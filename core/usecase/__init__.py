from .exercise_usecase import ExerciseUseCase
from .ranking_usecase import RankingUseCase

__all__ = [
    "ExerciseUseCase",
    "RankingUseCase",
]
