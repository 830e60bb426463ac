from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, List, Tuple, Union
import re

from core.entities import ExerciseCategory
from core.exceptions import InvalidFieldError, InvalidUserSelectorError

DESCRIPTION_PATTERN = re.compile(r"^[A-Za-z0-9\s]+$")
LOOKBACK_DAYS = 29


def validate_description(description: str) -> bool:
    """
    Validate an exercise description.

    Args:
        description (str): The description to validate.

    Returns:
        bool: True if the description only holds letters, digits and whitespace.
    """
    return DESCRIPTION_PATTERN.match(description) is not None


def validate_category(category: str) -> bool:
    """
    Validate an exercise category against the closed set of categories.

    Args:
        category (str): The category name, e.g. "RUNNING".

    Returns:
        bool: True if the category is known.
    """
    return category in ExerciseCategory._value2member_map_


def to_utc_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC. Naive values are taken as UTC already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_start_time(value: Union[str, datetime]) -> datetime:
    """
    Parse an ISO-8601 start time into a naive UTC datetime.

    Args:
        value (Union[str, datetime]): Raw value received from the client.

    Returns:
        datetime: The start time in UTC.

    Raises:
        InvalidFieldError: If the value is not an ISO-8601 timestamp.
    """
    if isinstance(value, datetime):
        return to_utc_naive(value)
    try:
        return to_utc_naive(datetime.fromisoformat(value))
    except (TypeError, ValueError):
        raise InvalidFieldError(
            "startTime", "Invalid startTime format must be ISO8601"
        )


def compute_finish_time(start_time: datetime, duration: int) -> datetime:
    """Finish of an exercise, derived as start + duration seconds."""
    return start_time + timedelta(seconds=duration)


def lookback_window(today: date, days: int = LOOKBACK_DAYS) -> Tuple[datetime, datetime]:
    """
    Trailing scoring window that excludes the current day.

    Args:
        today (date): The day the ranking is requested.
        days (int): Length of the window in days.

    Returns:
        Tuple[datetime, datetime]: (inclusive start, exclusive end), both at midnight UTC.
    """
    window_end = datetime.combine(today, time.min)
    window_start = window_end - timedelta(days=days)
    return window_start, window_end


def parse_user_ids(raw_values: Iterable[str]) -> List[int]:
    """
    Parse the userIds selector of a ranking request.

    Both repeated parameters and comma separated lists are accepted.
    Duplicates are dropped keeping the first occurrence.

    Raises:
        InvalidUserSelectorError: If no id is given or an id is not a positive integer.
    """
    user_ids: List[int] = []
    for raw in raw_values or []:
        for part in raw.split(","):
            part = part.strip()
            if not part:
                continue
            if not (part.isascii() and part.isdigit()) or int(part) <= 0:
                raise InvalidUserSelectorError(f"Invalid params userIds: {part!r}")
            user_id = int(part)
            if user_id not in user_ids:
                user_ids.append(user_id)

    if not user_ids:
        raise InvalidUserSelectorError()
    return user_ids
