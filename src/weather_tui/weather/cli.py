"""Command line interface for the forecast viewer."""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List, Optional

import structlog

from ..config import Settings, get_settings
from ..logging_setup import setup_logging
from .coordinates import CoordinateError, resolve_coordinates
from .display import TerminalSession, run_display
from .models import Coordinates, Forecast
from .open_meteo_client import ForecastError
from .response_formatter import ForecastFormatter
from .weather_agent import WeatherAgent

logger = structlog.get_logger(__name__)


async def _run(coords: Coordinates, settings: Settings) -> Forecast:
    agent = WeatherAgent(settings=settings)
    try:
        return await agent.get_forecast(coords)
    finally:
        await agent.aclose()


def _days(value: str) -> int:
    days = int(value)
    if not 1 <= days <= 16:
        raise argparse.ArgumentTypeError("must be between 1 and 16")
    return days


def build_parser(prog_name: Optional[str] = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog_name,
        description="Chart the daily maximum temperature forecast in the terminal.",
        epilog="Put -- before the coordinates if one is written like -1e1: -- -1e1 151.2",
    )
    parser.add_argument(
        "coords",
        nargs="*",
        metavar="LAT LON",
        help="latitude and longitude (default: New York City)",
    )
    parser.add_argument("--days", type=_days, help="number of forecast days (1-16)")
    parser.add_argument("--unit", choices=["celsius", "fahrenheit"], help="temperature unit")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="reject malformed coordinates instead of using the default location",
    )
    return parser


def main(argv: Optional[List[str]] = None, prog_name: Optional[str] = None) -> int:
    parser = build_parser(prog_name)
    args = parser.parse_args(argv)

    settings = get_settings()
    overrides = {}
    if args.days is not None:
        overrides["forecast_days"] = args.days
    if args.unit is not None:
        overrides["temperature_unit"] = args.unit
    if overrides:
        settings = settings.model_copy(update=overrides)

    setup_logging(settings)
    default = Coordinates(settings.default_latitude, settings.default_longitude)
    try:
        coords = resolve_coordinates(args.coords, default=default, strict=args.strict)
    except CoordinateError as exc:
        parser.error(str(exc))

    try:
        forecast = asyncio.run(_run(coords, settings))
    except ForecastError as exc:
        logger.error("could not load forecast", error=str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("interrupted while fetching")
        return 130

    session = TerminalSession()
    try:
        run_display(
            forecast,
            session,
            formatter=ForecastFormatter(bar_width=settings.bar_width),
            tick=settings.tick_seconds,
        )
    except KeyboardInterrupt:
        logger.info("interrupted")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
