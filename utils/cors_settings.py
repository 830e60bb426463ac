from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List


class CorsSettings(BaseSettings):
    allowed_origins: List[str] = Field(default=["*"], description="List of allowed origins")
    allowed_methods: List[str] = Field(
        default=["GET", "POST", "PUT"], description="Methods used by the exercise and ranking endpoints"
    )
    allowed_headers: List[str] = Field(default=["*"], description="List of allowed headers")
    allow_credentials: bool = Field(default=False, description="Allow credentials")

    class Config:
        env_prefix = "CORS_"
        case_sensitive = False
        validate_assignment = True
        extra = "ignore"
        env_file = ".env"
        env_file_encoding = "utf-8"
