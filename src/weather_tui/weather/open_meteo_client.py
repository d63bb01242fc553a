"""Async client for the Open-Meteo forecast API."""

from __future__ import annotations

from typing import Dict, Optional

import httpx
import structlog

from ..config import Settings, get_settings
from .models import Coordinates

logger = structlog.get_logger(__name__)

DAILY_FIELDS = "temperature_2m_max"
CURRENT_FIELDS = "temperature_2m,wind_speed_10m"


class ForecastError(Exception):
    """The forecast could not be fetched or understood."""


class OpenMeteoClient:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.request_timeout),
            headers={"User-Agent": self.settings.user_agent},
        )

    def _params(self, coords: Coordinates) -> Dict[str, object]:
        return {
            "latitude": coords.latitude,
            "longitude": coords.longitude,
            "daily": DAILY_FIELDS,
            "current": CURRENT_FIELDS,
            "temperature_unit": self.settings.temperature_unit,
            "wind_speed_unit": self.settings.wind_speed_unit,
            "timezone": self.settings.timezone,
            "forecast_days": self.settings.forecast_days,
        }

    async def _get(self, url: str, params: Dict[str, object]) -> Dict:
        try:
            resp = await self.client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error("open-meteo request failed", url=url, error=str(e))
            raise ForecastError(f"request to {url} failed: {e}") from e

        if resp.is_error:
            reason = resp.reason_phrase
            try:
                body = resp.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and body.get("reason"):
                reason = body["reason"]
            logger.error("open-meteo returned an error", status=resp.status_code, reason=reason)
            raise ForecastError(f"HTTP {resp.status_code}: {reason}")

        try:
            data = resp.json()
        except ValueError as e:
            raise ForecastError("response body is not valid JSON") from e
        if not isinstance(data, dict):
            raise ForecastError("response body is not a JSON object")
        return data

    async def get_forecast(self, coords: Coordinates) -> Dict:
        logger.info("fetching forecast", coordinates=str(coords))
        return await self._get(self.settings.api_url, self._params(coords))

    async def aclose(self) -> None:
        await self.client.aclose()
