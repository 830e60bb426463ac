from fastapi import Depends

from core.interface import ExerciseRepositoryInterface
from core.usecase import ExerciseUseCase, RankingUseCase
from infrastructure.di import get_exercise_repository
from utils import RankingSettings

ranking_settings = RankingSettings()


async def get_exercise_usecase(
    repository: ExerciseRepositoryInterface = Depends(get_exercise_repository),
) -> ExerciseUseCase:
    """
    Get an ExerciseUseCase instance bound to the request's repository.

    Args:
        repository: The exercise repository

    Returns:
        ExerciseUseCase: An ExerciseUseCase instance
    """
    return ExerciseUseCase(repository=repository)


async def get_ranking_usecase(
    repository: ExerciseRepositoryInterface = Depends(get_exercise_repository),
) -> RankingUseCase:
    """
    Get a RankingUseCase instance bound to the request's repository.

    Args:
        repository: The exercise repository

    Returns:
        RankingUseCase: A RankingUseCase instance
    """
    return RankingUseCase(
        repository=repository, lookback_days=ranking_settings.lookback_days
    )
