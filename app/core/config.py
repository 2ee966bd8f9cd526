"""
Application Configuration
Loads settings from environment variables.
"""

from typing import List
from pydantic_settings import BaseSettings
from pydantic import field_validator
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    APP_NAME: str = "SSImage Creator API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Image Generation (Gemini 2.5 Flash Image - Nano Banana)
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash-image-preview"
    GENERATION_TIMEOUT: float = 120.0  # Seconds per provider call

    # Generation pipeline
    FAN_OUT_COUNT: int = 4  # Independent variants requested per generation
    MAX_UPLOAD_IMAGES: int = 5
    MAX_UPLOAD_BYTES: int = 20 * 1024 * 1024  # Per file

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    @field_validator('GEMINI_API_KEY', mode='before')
    @classmethod
    def strip_api_keys(cls, v):
        """Strip whitespace and newlines from API keys loaded from secrets."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('FAN_OUT_COUNT', 'MAX_UPLOAD_IMAGES')
    @classmethod
    def positive_counts(cls, v):
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
