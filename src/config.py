"""Application configuration loaded from environment variables and .env file."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    DATABASE_URL: str = "sqlite:///./pet.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Pet simulation
    DEFAULT_PET_ID: str = "default"
    TICK_ENABLED: bool = True
    TICK_INTERVAL_SECONDS: float = 60.0

    # AI Provider settings
    AI_PROVIDER: str = "mock"
    AI_API_KEY: Optional[str] = None
    AI_MODEL: Optional[str] = None
    AI_BASE_URL: Optional[str] = None
    CHAT_MAX_TOKENS: int = 120


settings = Settings()
