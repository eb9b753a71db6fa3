from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./twitch_viewers.db"

    # Server
    API_PORT: int = 8001
    LOG_LEVEL: str = "INFO"

    # Twitch
    TWITCH_CLIENT_ID: str = ""
    TWITCH_ACCESS_TOKEN: str = ""
    TWITCH_GAME_NAME: str = ""
    TWITCH_API_BASE_URL: str = "https://api.twitch.tv/helix"
    TWITCH_REQUEST_TIMEOUT: float = 30.0

    # Schedule (crontab evaluated in UTC)
    COLLECT_CRONTAB: str = "0 * * * *"
    COLLECT_ON_STARTUP: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
