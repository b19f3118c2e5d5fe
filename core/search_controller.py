"""Coordinate the geocoding and forecast lookups for one search form.

The controller owns the single ``SearchState`` value for a form and is the
only writer of it. A search is a two-step chain (resolve the city, then fetch
its current weather) with a suspension point at each network call. Because a
user may submit again while an earlier chain is still waiting on the network,
each chain is stamped with a generation number and only commits its outcome
while that generation is still the latest one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter
from typing import Awaitable, Callable, Optional

from core.errors import WeatherLookupError
from core.models import Location, WeatherSnapshot
from core.search_state import (
    ForecastFailed,
    ForecastSucceeded,
    GeocodeFailed,
    GeocodeSucceeded,
    SearchEvent,
    SearchState,
    SubmitPressed,
    reduce,
)
from tools import weather_tool

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = WeatherLookupError.default_message

CityResolver = Callable[[str], Awaitable[Location]]
WeatherFetcher = Callable[[float, float], Awaitable[WeatherSnapshot]]


@dataclass(frozen=True)
class PendingSearch:
    """Ticket for an accepted submission that still has to run."""

    generation: int
    query: str


class SearchController:
    """Owns the search state and runs the resolve-then-fetch chain."""

    def __init__(
        self,
        resolve_city: Optional[CityResolver] = None,
        fetch_current: Optional[WeatherFetcher] = None,
    ) -> None:
        self._resolve_city = resolve_city or weather_tool.resolve_city
        self._fetch_current = fetch_current or weather_tool.fetch_current
        self._state = SearchState()
        self._generation = 0

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    def submit(self, query: str) -> Optional[PendingSearch]:
        """Apply a form submission and return a ticket when a search must run.

        Blank input moves straight to the error view and returns ``None``.
        Anything else bumps the generation, so any chain still in flight
        becomes stale, and enters the loading view.
        """

        self._generation += 1
        self._state = reduce(self._state, SubmitPressed(query))
        if not self._state.loading:
            logger.info("Rejected blank search submission")
            return None
        return PendingSearch(generation=self._generation, query=query.strip())

    async def run(self, pending: PendingSearch) -> SearchState:
        """Run the chain for ``pending`` and return the state afterwards."""

        started = perf_counter()
        logger.info("Search %d started for %r", pending.generation, pending.query)

        try:
            location = await self._resolve_city(pending.query)
        except WeatherLookupError as exc:
            self._commit(pending, GeocodeFailed(exc.message))
            return self._state
        except Exception:
            logger.exception("Unexpected failure resolving %r", pending.query)
            self._commit(pending, GeocodeFailed(UNEXPECTED_ERROR_MESSAGE))
            return self._state

        if not self._commit(pending, GeocodeSucceeded(location)):
            return self._state

        try:
            weather = await self._fetch_current(location.latitude, location.longitude)
        except WeatherLookupError as exc:
            self._commit(pending, ForecastFailed(exc.message))
            return self._state
        except Exception:
            logger.exception("Unexpected failure fetching weather for %s", location.label)
            self._commit(pending, ForecastFailed(UNEXPECTED_ERROR_MESSAGE))
            return self._state

        if self._commit(pending, ForecastSucceeded(weather)):
            latency_ms = int((perf_counter() - started) * 1000)
            logger.info(
                "Search %d resolved %s (code %d) in %d ms",
                pending.generation,
                location.label,
                weather.weather_code,
                latency_ms,
            )
        return self._state

    async def search(self, query: str) -> SearchState:
        """Submit ``query`` and wait for the resulting state."""

        pending = self.submit(query)
        if pending is None:
            return self._state
        return await self.run(pending)

    def _commit(self, pending: PendingSearch, event: SearchEvent) -> bool:
        if pending.generation != self._generation:
            logger.debug(
                "Discarding %s from stale search %d (current %d)",
                type(event).__name__,
                pending.generation,
                self._generation,
            )
            return False
        self._state = reduce(self._state, event)
        if isinstance(event, (GeocodeFailed, ForecastFailed)):
            logger.info("Search %d failed: %s", pending.generation, event.message)
        return True


__all__ = ["PendingSearch", "SearchController", "UNEXPECTED_ERROR_MESSAGE"]
