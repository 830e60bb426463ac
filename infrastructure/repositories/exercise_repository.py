import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.entities import ExerciseCategory, ExerciseEntity
from core.exceptions import ExerciseNotFoundError, StorageFailureError
from core.interface import ExerciseRepositoryInterface
from infrastructure.database import ExerciseModel


class ExerciseRepository(ExerciseRepositoryInterface):
    """
    Repository for exercise-related operations with SQLAlchemy.
    Every SQLAlchemyError is reported as StorageFailureError.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.logger = logging.getLogger("exercise_repository")

    @staticmethod
    def _to_entity(model: ExerciseModel) -> ExerciseEntity:
        return ExerciseEntity(
            id=model.id,
            user_id=model.user_id,
            description=model.description,
            category=ExerciseCategory(model.type),
            start_time=model.start_time,
            duration=model.duration,
            calories=model.calories,
        )

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        try:
            yield
            await self.session.commit()
        except SQLAlchemyError as e:
            self.logger.error(f"Transaction failed, rolling back: {e}")
            await self.session.rollback()
            raise StorageFailureError() from e
        except Exception:
            await self.session.rollback()
            raise

    async def fetch_window(
        self,
        user_id: int,
        category: ExerciseCategory,
        window_start: datetime,
        window_end: datetime,
    ) -> List[ExerciseEntity]:
        """
        Retrieve a user's exercises of one category started inside the window.
        """
        statement = (
            select(ExerciseModel)
            .where(
                ExerciseModel.user_id == user_id,
                ExerciseModel.type == category.value,
                ExerciseModel.start_time >= window_start,
                ExerciseModel.start_time < window_end,
            )
            .order_by(ExerciseModel.start_time.desc())
        )
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching {category.value} exercises of user {user_id}: {e}")
            raise StorageFailureError() from e
        return [self._to_entity(model) for model in result.scalars().all()]

    async def find_overlap_candidates(
        self,
        user_id: int,
        start_time: datetime,
        finish_time: datetime,
        exclude_id: Optional[int] = None,
    ) -> List[ExerciseEntity]:
        """
        Retrieve a user's exercises intersecting the closed window [start_time, finish_time].
        """
        statement = select(ExerciseModel).where(
            ExerciseModel.user_id == user_id,
            ExerciseModel.start_time <= finish_time,
            ExerciseModel.finish_time >= start_time,
        )
        if exclude_id is not None:
            statement = statement.where(ExerciseModel.id != exclude_id)
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            self.logger.error(f"Error checking overlapping exercises of user {user_id}: {e}")
            raise StorageFailureError() from e
        return [self._to_entity(model) for model in result.scalars().all()]

    async def get_exercise(self, exercise_id: int) -> Optional[ExerciseEntity]:
        """
        Retrieve an exercise by ID.
        """
        try:
            model = await self.session.get(ExerciseModel, exercise_id)
        except SQLAlchemyError as e:
            self.logger.error(f"Error retrieving exercise {exercise_id}: {e}")
            raise StorageFailureError() from e
        if model is None:
            return None
        return self._to_entity(model)

    async def create_exercise(self, exercise: ExerciseEntity) -> ExerciseEntity:
        """
        Insert a new exercise and return it with the assigned ID.
        """
        model = ExerciseModel(
            user_id=exercise.user_id,
            description=exercise.description,
            type=exercise.category.value,
            start_time=exercise.start_time,
            finish_time=exercise.finish_time,
            duration=exercise.duration,
            calories=exercise.calories,
        )
        try:
            self.session.add(model)
            await self.session.flush()
        except SQLAlchemyError as e:
            self.logger.error(f"Error creating exercise for user {exercise.user_id}: {e}")
            raise StorageFailureError() from e
        return self._to_entity(model)

    async def update_exercise(self, exercise: ExerciseEntity) -> ExerciseEntity:
        """
        Replace description, start time, duration and calories of an existing exercise.
        """
        try:
            model = await self.session.get(ExerciseModel, exercise.id)
            if model is None:
                raise ExerciseNotFoundError(exercise.id)
            model.description = exercise.description
            model.start_time = exercise.start_time
            model.finish_time = exercise.finish_time
            model.duration = exercise.duration
            model.calories = exercise.calories
            await self.session.flush()
        except SQLAlchemyError as e:
            self.logger.error(f"Error updating exercise {exercise.id}: {e}")
            raise StorageFailureError() from e
        return self._to_entity(model)
