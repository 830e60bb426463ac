from dataclasses import dataclass, asdict
from datetime import datetime
from fractions import Fraction
from typing import Any, Dict, Optional

from .exercise_entity import ExerciseCategory


@dataclass(frozen=True)
class CategoryScore:
    """Score of one user for one exercise category. Derived, never stored."""
    user_id: int
    category: ExerciseCategory
    score: Fraction = Fraction(0)
    last_exercise_at: Optional[datetime] = None

    @property
    def has_activity(self) -> bool:
        return self.last_exercise_at is not None


@dataclass(frozen=True)
class UserScore:
    """
    Total score of one user across all categories. Derived, never stored.
    Scores stay exact fractions so equal totals compare equal.
    """
    user_id: int
    total_score: Fraction = Fraction(0)
    last_activity_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert user score to a python dictionary"""
        data = asdict(self)
        data["total_score"] = float(self.total_score)
        return data
