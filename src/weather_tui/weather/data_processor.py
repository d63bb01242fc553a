"""Weather data processing utilities."""

from __future__ import annotations

from typing import Dict

import structlog
from pydantic import ValidationError

from .models import CurrentConditions, DailyReading, Forecast, OpenMeteoResponse
from .open_meteo_client import ForecastError

logger = structlog.get_logger(__name__)


# Unit labels Open-Meteo reports for each request parameter value
TEMPERATURE_LABELS = {"celsius": "°C", "fahrenheit": "°F"}
WIND_SPEED_LABELS = {"kmh": "km/h", "ms": "m/s", "mph": "mp/h", "kn": "kn"}


class ForecastProcessor:
    def __init__(self, temperature_unit: str = "fahrenheit", wind_speed_unit: str = "mph") -> None:
        self.temperature_label = TEMPERATURE_LABELS.get(temperature_unit, temperature_unit)
        self.wind_speed_label = WIND_SPEED_LABELS.get(wind_speed_unit, wind_speed_unit)

    def process_forecast(self, data: Dict) -> Forecast:
        """Turn a raw Open-Meteo body into a :class:`Forecast`."""
        try:
            parsed = OpenMeteoResponse.model_validate(data)
        except ValidationError as e:
            logger.error("unexpected forecast body", errors=e.error_count())
            raise ForecastError(f"unexpected forecast format: {e}") from e

        readings = tuple(
            DailyReading(day=day, max_temperature=temp)
            for day, temp in zip(parsed.daily.time, parsed.daily.temperature_2m_max)
        )
        current = None
        if parsed.current is not None:
            current = CurrentConditions(
                time=parsed.current.time,
                temperature=parsed.current.temperature_2m,
                wind_speed=parsed.current.wind_speed_10m,
            )
        logger.debug("process_forecast", days=len(readings))
        return Forecast(
            readings=readings,
            temperature_unit=parsed.daily_units.get("temperature_2m_max", self.temperature_label),
            wind_speed_unit=parsed.current_units.get("wind_speed_10m", self.wind_speed_label),
            latitude=parsed.latitude,
            longitude=parsed.longitude,
            timezone=parsed.timezone,
            current=current,
        )
