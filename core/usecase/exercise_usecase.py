from typing import Any, Optional
import logging

from core.entities import ExerciseCategory, ExerciseEntity
from core.exceptions import (
    MissingFieldError,
    InvalidFieldError,
    OverlapConflictError,
    ExerciseNotFoundError,
)
from core.interface import ExerciseRepositoryInterface
from core.service import (
    OverlapGuard,
    UserLockRegistry,
    user_locks,
    validate_description,
    validate_category,
    parse_start_time,
)


def _require_amount(field: str, value: Optional[int]) -> int:
    if value is None or value == 0:
        raise MissingFieldError(field)
    if value < 0:
        raise InvalidFieldError(field, f"Invalid {field} must be a positive number")
    return value


class ExerciseUseCase:
    """
    Use case class for creating and updating exercises.
    Every write is checked against the overlap invariant before it is persisted.
    """

    def __init__(
        self,
        repository: ExerciseRepositoryInterface,
        locks: Optional[UserLockRegistry] = None,
    ):
        self.repository = repository
        self.overlap_guard = OverlapGuard(repository)
        self.locks = locks or user_locks
        self.logger = logging.getLogger(__name__)

    def _validate_description(self, description: Optional[str]) -> dict:
        if not description:
            raise MissingFieldError("description")
        if not validate_description(description):
            raise InvalidFieldError(
                "description", "Invalid description not an alphanumeric string"
            )
        return {"description": description}

    def _validate_schedule(
        self,
        start_time: Optional[Any],
        duration: Optional[int],
        calories: Optional[int],
    ) -> dict:
        if start_time is None or start_time == "":
            raise MissingFieldError("startTime")
        return {
            "start_time": parse_start_time(start_time),
            "duration": _require_amount("duration", duration),
            "calories": _require_amount("calories", calories),
        }

    def validate_create_request(
        self,
        user_id: Optional[int],
        description: Optional[str],
        category: Optional[str],
        start_time: Optional[Any],
        duration: Optional[int],
        calories: Optional[int],
    ) -> ExerciseEntity:
        """
        Validate the fields of a new exercise in the order clients expect errors.

        Returns:
            ExerciseEntity without id, ready to be persisted

        Raises:
            MissingFieldError: If a required field is absent or zero
            InvalidFieldError: If a field has an unacceptable value
        """
        if not user_id:
            raise MissingFieldError("userId")
        if user_id < 0:
            raise InvalidFieldError("userId")

        fields = self._validate_description(description)

        if not category:
            raise MissingFieldError("type")
        if not validate_category(category):
            raise InvalidFieldError("type", "Invalid type")

        fields.update(self._validate_schedule(start_time, duration, calories))
        return ExerciseEntity(
            user_id=user_id, category=ExerciseCategory(category), **fields
        )

    def validate_update_request(
        self,
        exercise_id: Optional[int],
        description: Optional[str],
        start_time: Optional[Any],
        duration: Optional[int],
        calories: Optional[int],
        user_id: Optional[int] = None,
        category: Optional[str] = None,
    ) -> dict:
        """
        Validate the fields of an exercise update.
        Owner and category are immutable, so receiving them is an error.

        Returns:
            Dictionary with the replaced fields
        """
        if not exercise_id:
            raise MissingFieldError("id", "Missing exercise id")
        if exercise_id < 0:
            raise InvalidFieldError("id", "Invalid exercise id")
        if user_id is not None:
            raise InvalidFieldError("userId", "Unwanted userId field received")

        fields = self._validate_description(description)

        if category is not None:
            raise InvalidFieldError("type", "Unwanted type field received")

        fields.update(self._validate_schedule(start_time, duration, calories))
        return fields

    async def create_exercise(
        self,
        user_id: Optional[int],
        description: Optional[str],
        category: Optional[str],
        start_time: Optional[Any],
        duration: Optional[int],
        calories: Optional[int],
    ) -> ExerciseEntity:
        """
        Create a new exercise for a user.

        Args:
            user_id: Owner of the exercise
            description: Alphanumeric description
            category: One of the exercise categories
            start_time: ISO-8601 start time
            duration: Duration in seconds
            calories: Calories burnt

        Returns:
            The stored exercise with its id

        Raises:
            ExerciseError: One subclass per rejection kind
        """
        exercise = self.validate_create_request(
            user_id=user_id,
            description=description,
            category=category,
            start_time=start_time,
            duration=duration,
            calories=calories,
        )

        async with self.locks.hold(exercise.user_id):
            async with self.repository.atomic():
                if await self.overlap_guard.has_collision(
                    user_id=exercise.user_id,
                    start_time=exercise.start_time,
                    finish_time=exercise.finish_time,
                ):
                    raise OverlapConflictError()
                created = await self.repository.create_exercise(exercise)

        self.logger.info(f"Exercise {created.id} created for user {created.user_id}")
        return created

    async def update_exercise(
        self,
        exercise_id: Optional[int],
        description: Optional[str],
        start_time: Optional[Any],
        duration: Optional[int],
        calories: Optional[int],
        user_id: Optional[int] = None,
        category: Optional[str] = None,
    ) -> ExerciseEntity:
        """
        Replace description, start time, duration and calories of an exercise.

        The exercise being updated is excluded from the overlap check.

        Returns:
            The full updated exercise, including owner and category

        Raises:
            ExerciseError: One subclass per rejection kind
        """
        fields = self.validate_update_request(
            exercise_id=exercise_id,
            description=description,
            start_time=start_time,
            duration=duration,
            calories=calories,
            user_id=user_id,
            category=category,
        )

        existing = await self.repository.get_exercise(exercise_id)
        if existing is None:
            raise ExerciseNotFoundError(exercise_id)

        candidate = ExerciseEntity(
            id=existing.id,
            user_id=existing.user_id,
            category=existing.category,
            **fields,
        )

        async with self.locks.hold(existing.user_id):
            async with self.repository.atomic():
                if await self.overlap_guard.has_collision(
                    user_id=candidate.user_id,
                    start_time=candidate.start_time,
                    finish_time=candidate.finish_time,
                    exclude_id=candidate.id,
                ):
                    raise OverlapConflictError(
                        "The exercise that you intended to update overlaps with an existing one"
                    )
                updated = await self.repository.update_exercise(candidate)

        self.logger.info(f"Exercise {updated.id} updated for user {updated.user_id}")
        return updated
