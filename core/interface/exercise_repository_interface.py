from abc import ABC, abstractmethod
from datetime import datetime
from typing import AsyncContextManager, List, Optional

from core.entities import ExerciseCategory, ExerciseEntity


class ExerciseRepositoryInterface(ABC):
    """
    Storage contract for exercises.

    Implementations raise StorageFailureError on any data-access failure.
    """

    @abstractmethod
    def atomic(self) -> AsyncContextManager[None]:
        """Run the enclosed reads and writes as one transaction."""

    @abstractmethod
    async def fetch_window(
        self,
        user_id: int,
        category: ExerciseCategory,
        window_start: datetime,
        window_end: datetime,
    ) -> List[ExerciseEntity]:
        """
        Exercises of a user and category with window_start <= start < window_end,
        most recent start first.
        """

    @abstractmethod
    async def find_overlap_candidates(
        self,
        user_id: int,
        start_time: datetime,
        finish_time: datetime,
        exclude_id: Optional[int] = None,
    ) -> List[ExerciseEntity]:
        """Exercises of a user whose window may intersect [start_time, finish_time]."""

    @abstractmethod
    async def get_exercise(self, exercise_id: int) -> Optional[ExerciseEntity]:
        pass

    @abstractmethod
    async def create_exercise(self, exercise: ExerciseEntity) -> ExerciseEntity:
        """Persist a new exercise and return it with its assigned id."""

    @abstractmethod
    async def update_exercise(self, exercise: ExerciseEntity) -> ExerciseEntity:
        """Replace description, start time, duration and calories of an exercise."""
