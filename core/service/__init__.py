from .exercise_service import (
    validate_description,
    validate_category,
    parse_start_time,
    compute_finish_time,
    lookback_window,
    parse_user_ids,
)
from .scoring_service import (
    CATEGORY_WEIGHTS,
    calculate_category_score,
    aggregate_user_score,
    ranking_sort_key,
    compare_user_scores,
    outranks,
    rank_user_scores,
)
from .overlap_service import OverlapGuard, windows_overlap
from .user_lock import UserLockRegistry, user_locks

__all__ = [
    "validate_description",
    "validate_category",
    "parse_start_time",
    "compute_finish_time",
    "lookback_window",
    "parse_user_ids",
    "CATEGORY_WEIGHTS",
    "calculate_category_score",
    "aggregate_user_score",
    "ranking_sort_key",
    "compare_user_scores",
    "outranks",
    "rank_user_scores",
    "OverlapGuard",
    "windows_overlap",
    "UserLockRegistry",
    "user_locks",
]
