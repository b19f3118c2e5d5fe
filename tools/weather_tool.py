"""Open-Meteo clients for resolving a city and fetching its current weather.

The module separates the blocking helpers that call the third-party APIs
(``geocode_city`` / ``get_current_weather``) from the awaitable entry points
the search controller chains together (``resolve_city`` / ``fetch_current``).
"""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any, Dict, Mapping

import requests

from app.config import get_current_fields, get_forecast_url, get_geocoding_url
from core import http
from core.errors import InvalidDataError, NetworkError, NotFoundError
from core.models import Location, WeatherSnapshot

logger = logging.getLogger(__name__)

GEOCODING_FAILED_MESSAGE = "Failed to fetch coordinates."
CITY_NOT_FOUND_MESSAGE = "City not found. Please try another city."
FORECAST_FAILED_MESSAGE = "Failed to fetch weather data."
INVALID_FORECAST_MESSAGE = "Invalid weather data format received."


def _http_get(url: str, **kwargs) -> requests.Response:
    return http.get(url, **kwargs)


# --- External API helper functions -----------------------------------------
def geocode_city(name: str) -> Location:
    """Return the first geocoding match for ``name``.

    Raises:
        NetworkError: the request failed or returned a non-2xx status.
        NotFoundError: no results, or a body that cannot be read as one.
    """

    try:
        r = _http_get(get_geocoding_url(), params={"name": name, "count": 1})
        r.raise_for_status()
    except requests.RequestException as exc:
        logger.warning("Geocoding request for %r failed: %s", name, exc)
        raise NetworkError(GEOCODING_FAILED_MESSAGE) from exc

    try:
        data = r.json()
    except ValueError as exc:
        raise NotFoundError(CITY_NOT_FOUND_MESSAGE) from exc

    location = _parse_location(data)
    if location is None:
        logger.info("No geocoding match for %r", name)
        raise NotFoundError(CITY_NOT_FOUND_MESSAGE)
    return location


def get_current_weather(lat: float, lon: float) -> WeatherSnapshot:
    """Return the current-conditions record at ``lat``/``lon``.

    Raises:
        NetworkError: the request failed or returned a non-2xx status.
        InvalidDataError: the body lacks ``current`` or one of its fields.
    """

    try:
        r = _http_get(
            get_forecast_url(),
            params={
                "latitude": lat,
                "longitude": lon,
                "current": ",".join(get_current_fields()),
            },
        )
        r.raise_for_status()
    except requests.RequestException as exc:
        logger.warning("Forecast request for (%s, %s) failed: %s", lat, lon, exc)
        raise NetworkError(FORECAST_FAILED_MESSAGE) from exc

    try:
        data = r.json()
    except ValueError as exc:
        raise InvalidDataError(INVALID_FORECAST_MESSAGE) from exc

    snapshot = _parse_snapshot(data)
    if snapshot is None:
        logger.warning("Forecast response for (%s, %s) had no usable current record", lat, lon)
        raise InvalidDataError(INVALID_FORECAST_MESSAGE)
    return snapshot


# --- Awaitable entry points -------------------------------------------------
async def resolve_city(name: str) -> Location:
    return await asyncio.to_thread(geocode_city, name)


async def fetch_current(lat: float, lon: float) -> WeatherSnapshot:
    return await asyncio.to_thread(get_current_weather, lat, lon)


# --- Response parsing -------------------------------------------------------
def _parse_location(data: Any) -> Location | None:
    if not isinstance(data, Mapping):
        return None
    results = data.get("results")
    if not isinstance(results, list) or not results:
        return None

    res = results[0]
    if not isinstance(res, Mapping) or not res.get("name"):
        return None
    try:
        latitude = float(res["latitude"])
        longitude = float(res["longitude"])
    except (KeyError, TypeError, ValueError):
        return None

    return Location(
        name=str(res["name"]),
        country=str(res.get("country") or ""),
        latitude=latitude,
        longitude=longitude,
    )


def _parse_snapshot(data: Any) -> WeatherSnapshot | None:
    if not isinstance(data, Mapping):
        return None
    current = data.get("current")
    if not isinstance(current, Mapping):
        return None

    values: Dict[str, float] = {}
    for field in get_current_fields():
        value = current.get(field)
        if value is None or isinstance(value, bool):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        # json.loads accepts NaN and Infinity literals.
        if not math.isfinite(number):
            return None
        values[field] = number

    return WeatherSnapshot(
        temperature_c=values["temperature_2m"],
        relative_humidity_pct=values["relative_humidity_2m"],
        wind_speed_kmh=values["wind_speed_10m"],
        weather_code=int(values["weather_code"]),
    )


__all__ = [
    "fetch_current",
    "geocode_city",
    "get_current_weather",
    "resolve_city",
]
