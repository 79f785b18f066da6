"""Application configuration, read from environment variables (prefix CHESSBOT_) or a .env file."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """
    Settings for the chess bot.

    database_url: SQLAlchemy URL of the game record store.
    database_echo: log every SQL statement (handy while developing).
    render_base_url: image endpoint that turns a board position into a GIF.
    log_level: level for the root logger.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHESSBOT_",
        env_file=".env",
        extra="ignore",
    )

    database_url: str = "sqlite:///chessbot.db"
    database_echo: bool = False
    render_base_url: str = "https://lila-gif.fly.dev/image.gif"
    log_level: LogLevel = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance, so the environment is only parsed once per process."""
    return Settings()
