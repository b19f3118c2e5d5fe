"""Search state and the pure reducer that drives the four-view state machine.

The UI shows exactly one of four views at a time:

* ``IDLE``    - nothing searched yet (or nothing to show).
* ``LOADING`` - a search is in flight; error and result are cleared.
* ``ERROR``   - the last attempt failed; ``error_message`` is set.
* ``RESULT``  - both lookups succeeded; location and weather are set.

``reduce`` never mutates its input. Every transition returns a new
``SearchState`` so the controller can swap the whole value atomically.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from core.errors import ValidationError
from core.models import Location, WeatherSnapshot


class SearchView(Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    RESULT = "result"


@dataclass(frozen=True)
class SearchState:
    query_text: str = ""
    loading: bool = False
    error_message: Optional[str] = None
    location: Optional[Location] = None
    weather: Optional[WeatherSnapshot] = None

    @property
    def view(self) -> SearchView:
        return view_of(self)


# --- Events ------------------------------------------------------------------
@dataclass(frozen=True)
class SubmitPressed:
    query: str


@dataclass(frozen=True)
class GeocodeSucceeded:
    location: Location


@dataclass(frozen=True)
class GeocodeFailed:
    message: str


@dataclass(frozen=True)
class ForecastSucceeded:
    weather: WeatherSnapshot


@dataclass(frozen=True)
class ForecastFailed:
    message: str


SearchEvent = Union[SubmitPressed, GeocodeSucceeded, GeocodeFailed, ForecastSucceeded, ForecastFailed]


# --- Reducer -----------------------------------------------------------------
def reduce(state: SearchState, event: SearchEvent) -> SearchState:
    """Return the state that follows ``state`` once ``event`` is applied."""

    if isinstance(event, SubmitPressed):
        if not event.query.strip():
            return SearchState(
                query_text=event.query,
                error_message=ValidationError.default_message,
            )
        return SearchState(query_text=event.query, loading=True)

    if isinstance(event, GeocodeSucceeded):
        # The location is held back from the view until the forecast lands.
        return replace(state, location=event.location)

    if isinstance(event, ForecastSucceeded):
        return replace(state, query_text="", loading=False, error_message=None, weather=event.weather)

    if isinstance(event, (GeocodeFailed, ForecastFailed)):
        return SearchState(query_text=state.query_text, error_message=event.message)

    raise TypeError(f"Unsupported search event: {event!r}")


def view_of(state: SearchState) -> SearchView:
    """Return which of the four views ``state`` renders as."""

    if state.loading:
        return SearchView.LOADING
    if state.error_message:
        return SearchView.ERROR
    if state.location is not None and state.weather is not None:
        return SearchView.RESULT
    return SearchView.IDLE


__all__ = [
    "ForecastFailed",
    "ForecastSucceeded",
    "GeocodeFailed",
    "GeocodeSucceeded",
    "SearchEvent",
    "SearchState",
    "SearchView",
    "SubmitPressed",
    "reduce",
    "view_of",
]
