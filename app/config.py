"""
Configuration management for the Health Log Question Engine.
Uses pydantic-settings for type-safe environment variable handling.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Health Log Question Engine"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # CORS
    FRONTEND_ORIGIN: str = "http://localhost:3000"

    # Pattern analysis
    DEFAULT_ANALYSIS_DAYS: int = 30
    MAX_SYMPTOM_LOGS: int = 5000

    # Rate limiting
    RATE_LIMIT: str = "60/minute"
    FORWARDED_ALLOW_IPS: str = "127.0.0.1"

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
