from .db import database, get_database, get_db_session
from .repositories import get_exercise_repository

__all__ = [
    "database",
    "get_database",
    "get_db_session",
    "get_exercise_repository",
]
