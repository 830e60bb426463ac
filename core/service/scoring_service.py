from datetime import datetime, timedelta
from fractions import Fraction
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from core.entities import CategoryScore, ExerciseCategory, ExerciseEntity, UserScore

CATEGORY_WEIGHTS: Mapping[ExerciseCategory, int] = MappingProxyType(
    {
        ExerciseCategory.RUNNING: 2,
        ExerciseCategory.SWIMMING: 3,
        ExerciseCategory.STRENGTH_TRAINING: 3,
        ExerciseCategory.CIRCUIT_TRAINING: 4,
    }
)

INITIAL_DECAY_PERCENT = 100
DECAY_STEP_PERCENT = 10


def base_points(duration: int, calories: int) -> int:
    """
    Points of a single exercise before weighting and decay.

    Args:
        duration (int): Duration of the exercise in seconds.
        calories (int): Calories burnt during the exercise.

    Returns:
        int: Started minutes (duration rounded up to the next minute) plus calories.
    """
    return -(-duration // 60) + calories


def calculate_category_score(
    user_id: int,
    category: ExerciseCategory,
    exercises: Iterable[ExerciseEntity],
) -> CategoryScore:
    """
    Convert a user's exercises of one category into a single weighted score.

    Exercises are ranked by descending start time. The most recent one counts
    at 100%, each following one 10 percentage points less, and from the
    eleventh on nothing is added.

    Args:
        user_id (int): Owner of the exercises.
        category (ExerciseCategory): Category shared by all exercises.
        exercises (Iterable[ExerciseEntity]): Exercises inside the lookback window.

    Returns:
        CategoryScore: Score and finish time of the most recent exercise.
    """
    weight = CATEGORY_WEIGHTS[category]
    ranked = sorted(exercises, key=lambda exercise: exercise.start_time, reverse=True)

    # Summed in hundredths of a point so the total is exact
    hundredths = 0
    decay = INITIAL_DECAY_PERCENT
    for exercise in ranked:
        if decay <= 0:
            break
        weighted = base_points(exercise.duration, exercise.calories) * weight
        hundredths += weighted * decay
        decay -= DECAY_STEP_PERCENT

    last_exercise_at = ranked[0].finish_time if ranked else None
    return CategoryScore(
        user_id=user_id,
        category=category,
        score=Fraction(hundredths, 100),
        last_exercise_at=last_exercise_at,
    )


def aggregate_user_score(user_id: int, category_scores: Iterable[CategoryScore]) -> UserScore:
    """
    Sum the category scores of a user and find their most recent activity.

    Args:
        user_id (int): The user the scores belong to.
        category_scores (Iterable[CategoryScore]): One score per known category.

    Returns:
        UserScore: Total score and latest finish time among categories with activity.
    """
    total = Fraction(0)
    last_activity_at: Optional[datetime] = None
    for category_score in category_scores:
        total += category_score.score
        if category_score.has_activity and (
            last_activity_at is None or category_score.last_exercise_at > last_activity_at
        ):
            last_activity_at = category_score.last_exercise_at

    return UserScore(user_id=user_id, total_score=total, last_activity_at=last_activity_at)


def ranking_sort_key(user_score: UserScore) -> Tuple[Fraction, timedelta]:
    """Ascending sort key placing higher scores, then more recent activity, first."""
    last_activity = user_score.last_activity_at or datetime.min
    return (-Fraction(user_score.total_score), -(last_activity - datetime.min))


def compare_user_scores(first: UserScore, second: UserScore) -> int:
    """Three-way comparison for functools.cmp_to_key; negative if first ranks higher."""
    first_key = ranking_sort_key(first)
    second_key = ranking_sort_key(second)
    if first_key < second_key:
        return -1
    if first_key > second_key:
        return 1
    return 0


def outranks(first: UserScore, second: UserScore) -> bool:
    """True when first is placed strictly above second on the leaderboard."""
    return compare_user_scores(first, second) < 0


def rank_user_scores(user_scores: Sequence[UserScore]) -> List[UserScore]:
    """Order user scores into the leaderboard. Full ties keep their input order."""
    return sorted(user_scores, key=ranking_sort_key)
