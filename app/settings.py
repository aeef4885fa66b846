from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    MOON_TIMEZONE: Optional[str] = None
    REFRESH_INTERVAL_SECONDS: float = 60.0
    TODAY_ICON_SIZE: int = 160
    FORECAST_ICON_SIZE: int = 120
    CORS_ORIGINS: Optional[str] = "*"
    START_TICKER: bool = True
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
