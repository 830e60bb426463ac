from pydantic import Field
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """Configuration settings model using Pydantic for validation.
    Loads configuration from environment variables and .env file.
    """

    # Basic settings
    name: str = Field(default="GymRank", description="Name of the application")
    debug_mode: bool = Field(default=False, description="Enable debug mode")
    version: str = Field(default="1.0.0", description="Application version")

    # Logging settings
    file_log_level: str = Field(default="INFO", description="Logging level")
    screen_log_level: str = Field(default="WARNING", description="Logging level")

    # Rate limiting
    rate_limit_enabled: bool = Field(default=True, description="Enable request rate limiting")
    write_rate_limit: str = Field(default="30/minute", description="Limit for exercise writes")
    ranking_rate_limit: str = Field(default="60/minute", description="Limit for ranking reads")

    class Config:
        """Pydantic configuration."""
        env_prefix = "APP_"  # Environment variables prefix
        case_sensitive = False
        validate_assignment = True
        extra = "ignore"  # Ignore extra attributes
        env_file = ".env"  # Specify the .env file to load
        env_file_encoding = "utf-8"
