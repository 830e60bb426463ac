from interface.routers.exercise_router import exercise_router
from interface.routers.ranking_router import ranking_router

__all__ = ["exercise_router", "ranking_router"]
