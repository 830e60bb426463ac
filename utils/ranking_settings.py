from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class RankingSettings(BaseSettings):
    """Configuration settings for the leaderboard computation."""

    lookback_days: int = Field(
        default=29, description="Days before today whose exercises are scored"
    )

    @field_validator("lookback_days")
    def validate_lookback_days(cls, v):
        if v < 1:
            raise ValueError("lookback_days must be at least 1")
        return v

    class Config:
        env_prefix = "RANKING_"
        case_sensitive = False
        validate_assignment = True
        extra = "ignore"
        env_file = ".env"
        env_file_encoding = "utf-8"
