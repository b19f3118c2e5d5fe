"""Immutable records produced by the geocoding and forecast clients."""

from __future__ import annotations

from dataclasses import dataclass

from core.icons import IconVariant, icon_for
from core.weather_codes import describe


@dataclass(frozen=True)
class Location:
    name: str
    country: str
    latitude: float
    longitude: float

    @property
    def label(self) -> str:
        if not self.country:
            return self.name
        return f"{self.name}, {self.country}"


@dataclass(frozen=True)
class WeatherSnapshot:
    """Current-conditions record for one location."""

    temperature_c: float
    relative_humidity_pct: float
    wind_speed_kmh: float
    weather_code: int

    @property
    def description(self) -> str:
        return describe(self.weather_code)

    @property
    def icon(self) -> IconVariant:
        return icon_for(self.weather_code)


__all__ = ["Location", "WeatherSnapshot"]
