from typing import Optional


class ExerciseError(Exception):
    """Base exception for exercise and ranking operations"""

    kind: str = "ExerciseError"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict:
        """Convert the error to the payload returned to API clients"""
        return {"kind": self.kind, "message": self.message, "field": self.field}


class MissingFieldError(ExerciseError):
    """A required exercise field was not received"""

    kind = "MissingField"

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"Missing {field}", field=field)


class InvalidFieldError(ExerciseError):
    """An exercise field was received but its value is not acceptable"""

    kind = "InvalidField"

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"Invalid {field}", field=field)


class OverlapConflictError(ExerciseError):
    """The exercise window collides with another exercise of the same user"""

    kind = "OverlapConflict"

    def __init__(
        self,
        message: str = "The exercise that you intended to create overlaps with an existing one",
    ):
        super().__init__(message)


class ExerciseNotFoundError(ExerciseError):
    """The exercise targeted by an update does not exist"""

    kind = "NotFound"

    def __init__(self, exercise_id: int):
        super().__init__(f"The exercise you tried to update does not exist: {exercise_id}")
        self.exercise_id = exercise_id


class InvalidUserSelectorError(ExerciseError):
    """Ranking was requested without usable user identifiers"""

    kind = "InvalidUserSelector"

    def __init__(self, message: str = "Invalid params userIds"):
        super().__init__(message, field="userIds")
