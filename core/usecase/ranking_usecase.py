from datetime import date, datetime, timezone
from typing import List, Optional, Sequence
import logging

from core.entities import ExerciseCategory, UserScore
from core.exceptions import InvalidUserSelectorError
from core.interface import ExerciseRepositoryInterface
from core.service import (
    aggregate_user_score,
    calculate_category_score,
    lookback_window,
    rank_user_scores,
)
from core.service.exercise_service import LOOKBACK_DAYS


class RankingUseCase:
    """
    Use case class computing the leaderboard of a set of users.
    Scores are recomputed from stored exercises on every call.
    """

    def __init__(
        self,
        repository: ExerciseRepositoryInterface,
        lookback_days: int = LOOKBACK_DAYS,
    ):
        self.repository = repository
        self.lookback_days = lookback_days
        self.logger = logging.getLogger(__name__)

    async def get_user_score(
        self, user_id: int, window_start: datetime, window_end: datetime
    ) -> UserScore:
        """
        Score one user across every exercise category.

        Args:
            user_id: The user to score
            window_start: Inclusive start of the lookback window
            window_end: Exclusive end of the lookback window

        Returns:
            UserScore with total score and last activity
        """
        category_scores = []
        for category in ExerciseCategory:
            exercises = await self.repository.fetch_window(
                user_id=user_id,
                category=category,
                window_start=window_start,
                window_end=window_end,
            )
            category_scores.append(calculate_category_score(user_id, category, exercises))

        return aggregate_user_score(user_id, category_scores)

    async def get_ranking(
        self, user_ids: Sequence[int], today: Optional[date] = None
    ) -> List[UserScore]:
        """
        Build the leaderboard for the requested users.

        Args:
            user_ids: Non-empty list of user identifiers
            today: Day of the request, defaults to the current UTC day

        Returns:
            User scores ordered by score, then by most recent activity

        Raises:
            InvalidUserSelectorError: If no user id is given
            StorageFailureError: If any fetch fails; no partial ranking is returned
        """
        if not user_ids:
            raise InvalidUserSelectorError()

        today = today or datetime.now(timezone.utc).date()
        window_start, window_end = lookback_window(today, self.lookback_days)

        user_scores = []
        for user_id in user_ids:
            user_scores.append(await self.get_user_score(user_id, window_start, window_end))

        ranking = rank_user_scores(user_scores)
        self.logger.info(
            f"Ranking computed for {len(ranking)} users "
            f"in window {window_start.date()} - {window_end.date()}"
        )
        return ranking
