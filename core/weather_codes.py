"""Lookup table for Open-Meteo weather codes.

The forecast provider classifies sky and precipitation conditions with WMO
integer codes. Only the codes the UI knows how to describe are listed; any
other value resolves to ``UNKNOWN_CONDITION``.
"""

from __future__ import annotations

from typing import Dict

UNKNOWN_CONDITION = "Unknown weather condition"

WEATHER_CODE_DESCRIPTIONS: Dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}


def describe(code: int) -> str:
    """Return the human-readable description for ``code``."""

    return WEATHER_CODE_DESCRIPTIONS.get(code, UNKNOWN_CONDITION)


__all__ = ["UNKNOWN_CONDITION", "WEATHER_CODE_DESCRIPTIONS", "describe"]
