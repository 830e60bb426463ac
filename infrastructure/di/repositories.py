from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.repositories import ExerciseRepository
from infrastructure.di.db import get_db_session


async def get_exercise_repository(
    session: AsyncSession = Depends(get_db_session),
) -> ExerciseRepository:
    """
    Dependency for injecting an ExerciseRepository.

    Args:
        session: The request scoped database session.

    Returns:
        An instance of ExerciseRepository.
    """
    return ExerciseRepository(session=session)
