"""Centralize defaults and environment lookups for the weather lookup app."""

from __future__ import annotations

import logging
import os
from typing import Dict, Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Default configuration values
# ---------------------------------------------------------------------------
_DEFAULT_GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
_DEFAULT_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
_CURRENT_FIELDS: Tuple[str, ...] = (
    "temperature_2m",
    "relative_humidity_2m",
    "weather_code",
    "wind_speed_10m",
)
_DEFAULT_HTTP_TIMEOUT: float = 8.0
_DEFAULT_USER_AGENT = "weather-lookup/1.0"
_DEFAULT_LOG_LEVEL = "INFO"
_DEFAULT_WEB_UI_HOST = "127.0.0.1"
_DEFAULT_WEB_UI_PORT = 9000
_DEFAULT_LOADING_REFRESH_SECONDS = 1

# ---------------------------------------------------------------------------
# Accessors for static defaults
# ---------------------------------------------------------------------------
def get_current_fields() -> Tuple[str, ...]:
    """Return the current-condition fields requested from the forecast API."""

    return _CURRENT_FIELDS

# ---------------------------------------------------------------------------
# Environment-derived settings
# ---------------------------------------------------------------------------
def get_geocoding_url(env: Dict[str, str] | None = None) -> str:
    """Return the geocoding search endpoint.

    Args:
        env: Optional mapping used instead of ``os.environ`` to simplify testing.
    """

    source = env if env is not None else os.environ
    return source.get("GEOCODING_URL") or _DEFAULT_GEOCODING_URL


def get_forecast_url(env: Dict[str, str] | None = None) -> str:
    """Return the forecast endpoint used for current conditions."""

    source = env if env is not None else os.environ
    return source.get("FORECAST_URL") or _DEFAULT_FORECAST_URL


def get_http_timeout(env: Dict[str, str] | None = None) -> Optional[float]:
    """Return the per-request timeout in seconds, or ``None`` to wait forever."""

    source = env if env is not None else os.environ
    raw = source.get("HTTP_TIMEOUT")
    if raw is None:
        return _DEFAULT_HTTP_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        return _DEFAULT_HTTP_TIMEOUT
    return value if value > 0 else None


def get_user_agent(env: Dict[str, str] | None = None) -> str:
    source = env if env is not None else os.environ
    return source.get("HTTP_USER_AGENT") or _DEFAULT_USER_AGENT


def get_log_level(env: Dict[str, str] | None = None) -> int:
    """Return the numeric logging level configured through ``LOG_LEVEL``."""

    source = env if env is not None else os.environ
    raw = (source.get("LOG_LEVEL") or _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    if isinstance(level, int):
        return level
    return logging.getLevelName(_DEFAULT_LOG_LEVEL)


def get_web_ui_host(env: Dict[str, str] | None = None) -> str:
    source = env if env is not None else os.environ
    return source.get("WEB_UI_HOST", _DEFAULT_WEB_UI_HOST)


def get_web_ui_port(env: Dict[str, str] | None = None) -> int:
    source = env if env is not None else os.environ
    raw = source.get("WEB_UI_PORT")
    if raw is None:
        return _DEFAULT_WEB_UI_PORT
    try:
        value = int(raw)
    except ValueError:
        return _DEFAULT_WEB_UI_PORT
    return value if 0 < value <= 65535 else _DEFAULT_WEB_UI_PORT


def get_loading_refresh_seconds(env: Dict[str, str] | None = None) -> int:
    """Return how often the loading page asks the browser to refresh."""

    source = env if env is not None else os.environ
    raw = source.get("LOADING_REFRESH_SECONDS")
    if raw is None:
        return _DEFAULT_LOADING_REFRESH_SECONDS
    try:
        value = int(raw)
    except ValueError:
        return _DEFAULT_LOADING_REFRESH_SECONDS
    return max(value, 1)
