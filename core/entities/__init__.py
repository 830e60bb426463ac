from .exercise_entity import ExerciseCategory, ExerciseEntity
from .score_entity import CategoryScore, UserScore

__all__ = [
    "ExerciseCategory",
    "ExerciseEntity",
    "CategoryScore",
    "UserScore",
]
