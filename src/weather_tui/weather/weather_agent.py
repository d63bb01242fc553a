"""High level orchestrator for forecast retrieval."""

from __future__ import annotations

from typing import Optional

import structlog

from ..config import Settings, get_settings
from .data_processor import ForecastProcessor
from .models import Coordinates, Forecast
from .open_meteo_client import OpenMeteoClient

logger = structlog.get_logger(__name__)


class WeatherAgent:
    def __init__(
        self,
        client: Optional[OpenMeteoClient] = None,
        processor: Optional[ForecastProcessor] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.client = client or OpenMeteoClient(settings=settings)
        if processor is None:
            settings = settings or get_settings()
            processor = ForecastProcessor(
                temperature_unit=settings.temperature_unit,
                wind_speed_unit=settings.wind_speed_unit,
            )
        self.processor = processor

    async def get_forecast(self, coords: Coordinates) -> Forecast:
        raw = await self.client.get_forecast(coords)
        forecast = self.processor.process_forecast(raw)
        logger.info("forecast ready", coordinates=str(coords), days=len(forecast))
        return forecast

    async def aclose(self) -> None:
        await self.client.aclose()
