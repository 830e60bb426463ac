"""
Database
- Implements data persistence strategies
- Contains database-specific logic
- Holds the SQLAlchemy engine and the table mappings
"""

from .models import Base, ExerciseModel
from .sql_database import SQLDatabase

__all__ = [
    "Base",
    "ExerciseModel",
    "SQLDatabase",
]
