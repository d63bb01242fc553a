"""Map command line tokens to a coordinate pair."""

from __future__ import annotations

import math
from typing import Sequence

import structlog

from .models import Coordinates

logger = structlog.get_logger(__name__)

DEFAULT_COORDINATES = Coordinates(latitude=40.7128, longitude=-74.0060)


class CoordinateError(ValueError):
    pass


def _parse(tokens: Sequence[str]) -> Coordinates:
    if len(tokens) != 2:
        raise CoordinateError(f"expected latitude and longitude, got {len(tokens)} value(s)")
    try:
        lat, lon = float(tokens[0]), float(tokens[1])
    except ValueError:
        raise CoordinateError(f"not a number: {' '.join(tokens)}") from None
    if not (math.isfinite(lat) and -90.0 <= lat <= 90.0):
        raise CoordinateError(f"latitude out of range: {tokens[0]}")
    if not (math.isfinite(lon) and -180.0 <= lon <= 180.0):
        raise CoordinateError(f"longitude out of range: {tokens[1]}")
    return Coordinates(latitude=lat, longitude=lon)


def resolve_coordinates(
    tokens: Sequence[str],
    default: Coordinates = DEFAULT_COORDINATES,
    strict: bool = False,
) -> Coordinates:
    """Return the coordinates named by ``tokens``.

    Anything other than exactly two valid numbers falls back to ``default``
    unless ``strict`` is set, in which case :class:`CoordinateError` is raised.
    """
    if not tokens:
        return default
    try:
        return _parse(tokens)
    except CoordinateError as exc:
        if strict:
            raise
        logger.warning("using default coordinates", reason=str(exc), default=str(default))
        return default
