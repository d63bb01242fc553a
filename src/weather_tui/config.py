"""Application configuration."""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    api_url: str = "https://api.open-meteo.com/v1/forecast"
    default_latitude: float = 40.7128  # New York City
    default_longitude: float = -74.0060
    temperature_unit: Literal["celsius", "fahrenheit"] = "fahrenheit"
    wind_speed_unit: Literal["kmh", "ms", "mph", "kn"] = "mph"
    timezone: str = "auto"
    forecast_days: int = Field(default=7, ge=1, le=16)
    request_timeout: float = 10.0
    user_agent: str = "weather-tui/0.1"
    log_file: str = "weather_tui.log"
    log_level: str = "INFO"
    tick_seconds: float = 0.25
    bar_width: int = Field(default=40, ge=1)

    class Config:
        env_prefix = "WT_"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
