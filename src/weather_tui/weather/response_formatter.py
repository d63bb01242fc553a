"""Formatting helpers for forecast data."""

from __future__ import annotations

from typing import List, Optional, Sequence

from rich import box
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import Forecast

BAR_CHAR = "█"


def scale_bars(values: Sequence[Optional[float]], width: int) -> List[int]:
    """Return a bar length in cells for each value.

    Bars start at ``min(0, lowest value)`` so below-zero days still draw.
    The warmest day spans ``width`` cells and every present value gets at
    least one; missing values get none.
    """
    present = [v for v in values if v is not None]
    if not present:
        return [0 for _ in values]
    low = min(0.0, min(present))
    high = max(present)
    span = high - low
    lengths = []
    for v in values:
        if v is None:
            lengths.append(0)
        elif span == 0:
            lengths.append(width)
        else:
            lengths.append(max(1, round((v - low) / span * width)))
    return lengths


class ForecastFormatter:
    def __init__(self, bar_width: int = 40) -> None:
        self.bar_width = bar_width

    def title(self, forecast: Forecast) -> str:
        if forecast.latitude is None or forecast.longitude is None:
            return "Daily max temperature"
        where = f"{forecast.latitude:.2f}, {forecast.longitude:.2f}"
        if forecast.timezone:
            where = f"{where} ({forecast.timezone})"
        return f"Daily max temperature · {where}"

    def subtitle(self, forecast: Forecast) -> str:
        parts = []
        current = forecast.current
        if current is not None and current.temperature is not None:
            now = f"Now {current.temperature:.1f}{forecast.temperature_unit}"
            if current.wind_speed is not None:
                now += f", wind {current.wind_speed:.1f} {forecast.wind_speed_unit}"
            parts.append(now)
        parts.append("q to quit")
        return " | ".join(parts)

    def format_forecast(self, forecast: Forecast) -> Table:
        table = Table(box=None, show_header=False, expand=False, pad_edge=False)
        table.add_column("date", style="cyan", no_wrap=True)
        table.add_column("bar", no_wrap=True, min_width=self.bar_width)
        table.add_column("max", justify="right", no_wrap=True)

        lengths = scale_bars(forecast.temperatures, self.bar_width)
        for reading, length in zip(forecast.readings, lengths):
            if reading.max_temperature is None:
                value = Text("n/a", style="dim")
            else:
                value = Text(f"{reading.max_temperature:.1f}{forecast.temperature_unit}")
            table.add_row(
                reading.day.strftime("%a %m-%d"),
                Text(BAR_CHAR * length, style="bold yellow"),
                value,
            )
        return table

    def render(self, forecast: Forecast) -> Panel:
        if len(forecast) == 0:
            body = Text("No forecast data available", style="dim")
        else:
            body = self.format_forecast(forecast)
        return Panel(
            body,
            title=self.title(forecast),
            subtitle=self.subtitle(forecast),
            box=box.ROUNDED,
            border_style="blue",
            padding=(1, 2),
        )
