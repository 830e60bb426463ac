from .exercise import (
    ExerciseError,
    MissingFieldError,
    InvalidFieldError,
    OverlapConflictError,
    ExerciseNotFoundError,
    InvalidUserSelectorError,
)
from .database import StorageFailureError

__all__ = [
    "ExerciseError",
    "MissingFieldError",
    "InvalidFieldError",
    "OverlapConflictError",
    "ExerciseNotFoundError",
    "InvalidUserSelectorError",
    "StorageFailureError",
]
