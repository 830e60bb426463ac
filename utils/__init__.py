from .app_settings import AppSettings
from .cors_settings import CorsSettings
from .database_settings import DatabaseSettings
from .ranking_settings import RankingSettings

__all__ = [
    "AppSettings",
    "CorsSettings",
    "DatabaseSettings",
    "RankingSettings",
]
