from interface.di.exercise_service_di import get_exercise_usecase, get_ranking_usecase

__all__ = [
    "get_exercise_usecase",
    "get_ranking_usecase",
]
