"""Error kinds raised while resolving a city and fetching its weather.

Every kind carries the user-facing message as its ``str()`` so the search
controller can show it verbatim without a separate lookup table.
"""

from __future__ import annotations


class WeatherLookupError(Exception):
    """Base class for failures scoped to a single search attempt."""

    default_message = "Something went wrong. Please try again."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(WeatherLookupError):
    """Raised when the submitted city name is empty after trimming."""

    default_message = "Please enter a city name."


class NotFoundError(WeatherLookupError):
    """Raised when the geocoding service has no usable match."""

    default_message = "City not found. Please try another city."


class NetworkError(WeatherLookupError):
    """Raised when an HTTP call fails or the provider is unreachable."""

    default_message = "Could not reach the weather service."


class InvalidDataError(WeatherLookupError):
    """Raised when the forecast response lacks the current-conditions record."""

    default_message = "Invalid weather data format received."


__all__ = [
    "InvalidDataError",
    "NetworkError",
    "NotFoundError",
    "ValidationError",
    "WeatherLookupError",
]
