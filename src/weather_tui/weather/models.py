"""Forecast data structures."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, model_validator


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    def __str__(self) -> str:
        return f"{self.latitude:.4f}, {self.longitude:.4f}"


@dataclass(frozen=True)
class DailyReading:
    day: date
    max_temperature: Optional[float]


@dataclass(frozen=True)
class CurrentConditions:
    time: str
    temperature: Optional[float] = None
    wind_speed: Optional[float] = None


@dataclass(frozen=True)
class Forecast:
    """Ordered daily maxima for one location."""

    readings: Tuple[DailyReading, ...]
    temperature_unit: str = "°F"
    wind_speed_unit: str = "mp/h"
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    timezone: Optional[str] = None
    current: Optional[CurrentConditions] = None

    def __len__(self) -> int:
        return len(self.readings)

    @property
    def temperatures(self) -> List[Optional[float]]:
        return [r.max_temperature for r in self.readings]

    @property
    def dates(self) -> List[date]:
        return [r.day for r in self.readings]


# Wire format of the Open-Meteo forecast endpoint


class DailyBlock(BaseModel):
    time: List[date]
    temperature_2m_max: List[Optional[float]]

    @model_validator(mode="after")
    def _same_length(self) -> "DailyBlock":
        if len(self.time) != len(self.temperature_2m_max):
            raise ValueError(
                f"daily.time has {len(self.time)} entries but "
                f"daily.temperature_2m_max has {len(self.temperature_2m_max)}"
            )
        return self


class CurrentBlock(BaseModel):
    time: str
    temperature_2m: Optional[float] = None
    wind_speed_10m: Optional[float] = None


class OpenMeteoResponse(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    timezone: Optional[str] = None
    timezone_abbreviation: Optional[str] = None
    elevation: Optional[float] = None
    daily_units: Dict[str, str] = {}
    daily: DailyBlock
    current_units: Dict[str, str] = {}
    current: Optional[CurrentBlock] = None
