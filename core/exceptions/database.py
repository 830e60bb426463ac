from .exercise import ExerciseError


class StorageFailureError(ExerciseError):
    """Underlying data access failed; the whole operation is aborted"""

    kind = "StorageFailure"

    def __init__(self, message: str = "Internal database error"):
        super().__init__(message)
