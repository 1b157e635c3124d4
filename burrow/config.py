"""Application configuration loaded from environment variables and .env file."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    Grid dimensions are fixed per role and are not configurable.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Catalog settings
    HOMEBREW_ITEMS_PATH: Optional[str] = None

    # Sheet settings
    LOG_HISTORY_LIMIT: int = 200


settings = Settings()
