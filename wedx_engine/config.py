"""
Configuration settings for the wedX Ritual Engine.

This module defines all configuration parameters using Pydantic Settings,
enabling environment variable overrides for production deployment.
"""

from pydantic_settings import BaseSettings
from typing import List
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Attributes:
        APP_NAME: Application identifier
        APP_VERSION: Semantic version
        DEBUG: Enable debug mode

        # API Configuration
        API_V1_PREFIX: API version prefix
        HOST: Server host
        PORT: Server port
        CORS_ORIGINS: Allowed CORS origins

        # Planner API client
        PLANNER_API_URL: Base URL of the remote planner service
        PLANNER_API_TIMEOUT: Request timeout in seconds

        # Ritual timeline
        DUE_SOON_DAYS: Window (days) in which a task counts as due soon
    """

    # Application
    APP_NAME: str = "wedX Ritual Engine"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True
    ENVIRONMENT: str = "development"

    # API Configuration
    API_V1_PREFIX: str = "/api/v1"
    HOST: str = "0.0.0.0"
    PORT: int = 8002
    CORS_ORIGINS: List[str] = ["*"]

    # Planner API client (empty URL = same host as the caller)
    PLANNER_API_URL: str = ""
    PLANNER_API_TIMEOUT: float = 10.0

    # Ritual timeline
    DUE_SOON_DAYS: int = 7

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Allow extra fields in .env


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings factory.

    Returns:
        Settings: Application configuration singleton
    """
    return Settings()


# Global settings instance
settings = get_settings()
