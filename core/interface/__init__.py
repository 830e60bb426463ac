from .exercise_repository_interface import ExerciseRepositoryInterface

__all__ = [
    "ExerciseRepositoryInterface",
]
