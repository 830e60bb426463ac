import logging
from datetime import datetime
from typing import Optional

from core.interface import ExerciseRepositoryInterface


def windows_overlap(
    existing_start: datetime,
    existing_finish: datetime,
    proposed_start: datetime,
    proposed_finish: datetime,
) -> bool:
    """
    Closed-interval intersection test between two exercise windows.

    Touching endpoints count as a collision, and a window fully containing
    the other one collides as well.

    Returns:
        bool: True if the windows share at least one instant.
    """
    return existing_start <= proposed_finish and existing_finish >= proposed_start


class OverlapGuard:
    """
    Checks a proposed exercise window against the other exercises of its owner.

    Storage errors are not caught here, so a failed lookup blocks the write.
    """

    def __init__(self, repository: ExerciseRepositoryInterface):
        self.repository = repository
        self.logger = logging.getLogger(__name__)

    async def has_collision(
        self,
        user_id: int,
        start_time: datetime,
        finish_time: datetime,
        exclude_id: Optional[int] = None,
    ) -> bool:
        """
        Whether any other exercise of the user collides with [start_time, finish_time].

        Args:
            user_id: Owner of the proposed exercise
            start_time: Proposed start
            finish_time: Proposed finish (start + duration)
            exclude_id: Exercise being updated, ignored in the check

        Returns:
            True if a collision exists
        """
        candidates = await self.repository.find_overlap_candidates(
            user_id=user_id,
            start_time=start_time,
            finish_time=finish_time,
            exclude_id=exclude_id,
        )
        for existing in candidates:
            if exclude_id is not None and existing.id == exclude_id:
                continue
            if windows_overlap(existing.start_time, existing.finish_time, start_time, finish_time):
                self.logger.info(
                    f"Exercise window {start_time.isoformat()} - {finish_time.isoformat()} "
                    f"of user {user_id} collides with exercise {existing.id}"
                )
                return True
        return False
