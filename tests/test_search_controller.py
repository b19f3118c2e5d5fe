import asyncio

from app.presentation import build_page_view
from core.errors import NetworkError, NotFoundError
from core.models import Location, WeatherSnapshot
from core.search_controller import SearchController
from core.search_state import SearchState, SearchView

PARIS = Location(name="Paris", country="France", latitude=48.8566, longitude=2.3522)
BERLIN = Location(name="Berlin", country="Germany", latitude=52.52, longitude=13.41)
OVERCAST = WeatherSnapshot(temperature_c=18.5, relative_humidity_pct=60, wind_speed_kmh=12.4, weather_code=3)
SUNNY = WeatherSnapshot(temperature_c=22.0, relative_humidity_pct=40, wind_speed_kmh=5.0, weather_code=0)


class FakeServices:
    """Async stand-ins for the Open-Meteo clients that record every call."""

    def __init__(self, locations=None, weather=None):
        self.locations = dict(locations or {})
        self.weather = dict(weather or {})
        self.geocode_calls = []
        self.forecast_calls = []

    async def resolve_city(self, name):
        self.geocode_calls.append(name)
        result = self.locations.get(name)
        if isinstance(result, Exception):
            raise result
        if result is None:
            raise NotFoundError("City not found. Please try another city.")
        return result

    async def fetch_current(self, lat, lon):
        self.forecast_calls.append((lat, lon))
        result = self.weather[(lat, lon)]
        if isinstance(result, Exception):
            raise result
        return result

    def controller(self):
        return SearchController(resolve_city=self.resolve_city, fetch_current=self.fetch_current)


def _paris_services():
    return FakeServices(
        locations={"Paris": PARIS, "Berlin": BERLIN},
        weather={(PARIS.latitude, PARIS.longitude): OVERCAST, (BERLIN.latitude, BERLIN.longitude): SUNNY},
    )


def test_blank_input_never_touches_the_network():
    services = _paris_services()
    controller = services.controller()

    for query in ("", "   "):
        state = asyncio.run(controller.search(query))
        assert state.view is SearchView.ERROR
        assert state.error_message == "Please enter a city name."

    assert services.geocode_calls == []
    assert services.forecast_calls == []


def test_submit_returns_ticket_with_trimmed_query():
    controller = _paris_services().controller()

    pending = controller.submit("  Paris ")

    assert pending.query == "Paris"
    assert pending.generation == controller.generation
    assert controller.state.view is SearchView.LOADING
    assert controller.submit("  ") is None


def test_unknown_city_skips_forecast():
    services = _paris_services()
    controller = services.controller()

    state = asyncio.run(controller.search("Zzzzqx"))

    assert state.view is SearchView.ERROR
    assert "not found" in state.error_message.lower()
    assert services.geocode_calls == ["Zzzzqx"]
    assert services.forecast_calls == []


def test_paris_search_renders_result_card():
    services = _paris_services()
    controller = services.controller()

    state = asyncio.run(controller.search("Paris"))

    assert state.view is SearchView.RESULT
    card = build_page_view(state).card
    assert card.location_label == "Paris, France"
    assert card.temperature == "18.5°C"
    assert card.description == "Overcast"
    assert card.humidity == "60%"
    assert card.wind_speed == "12.4 km/h"
    assert services.forecast_calls == [(48.8566, 2.3522)]


def test_failed_retry_leaves_no_stale_result():
    services = _paris_services()
    controller = services.controller()
    asyncio.run(controller.search("Paris"))

    services.locations["Paris"] = NetworkError("Failed to fetch coordinates.")
    state = asyncio.run(controller.search("Paris"))

    assert state.view is SearchView.ERROR
    assert state.error_message == "Failed to fetch coordinates."
    assert state.location is None
    assert state.weather is None


def test_forecast_failure_reports_message():
    services = _paris_services()
    services.weather[(PARIS.latitude, PARIS.longitude)] = NetworkError("Failed to fetch weather data.")
    controller = services.controller()

    state = asyncio.run(controller.search("Paris"))

    assert state == SearchState(query_text="Paris", error_message="Failed to fetch weather data.")


def test_unexpected_client_error_is_reduced_to_message():
    services = _paris_services()
    services.locations["Paris"] = RuntimeError("boom")
    controller = services.controller()

    state = asyncio.run(controller.search("Paris"))

    assert state.view is SearchView.ERROR
    assert state.error_message == "Something went wrong. Please try again."
    assert not state.loading


def test_repeated_search_is_idempotent():
    controller = _paris_services().controller()

    first = asyncio.run(controller.search("Paris"))
    second = asyncio.run(controller.search("Paris"))

    assert first == second
    assert build_page_view(first).card == build_page_view(second).card


def test_newer_search_wins_when_older_completes_last():
    async def scenario():
        gate = asyncio.Event()
        services = _paris_services()

        async def slow_resolve(name):
            if name == "Paris":
                await gate.wait()
            return await services.resolve_city(name)

        controller = SearchController(resolve_city=slow_resolve, fetch_current=services.fetch_current)
        older = asyncio.create_task(controller.run(controller.submit("Paris")))
        await asyncio.sleep(0)

        newer_state = await controller.search("Berlin")
        gate.set()
        final_state = await older
        return services, newer_state, final_state

    services, newer_state, final_state = asyncio.run(scenario())

    assert newer_state.location == BERLIN
    assert final_state.location == BERLIN
    assert final_state.weather == SUNNY
    # The stale Paris chain never reached the forecast step.
    assert services.forecast_calls == [(BERLIN.latitude, BERLIN.longitude)]


def test_blank_submit_supersedes_in_flight_search():
    async def scenario():
        gate = asyncio.Event()
        services = _paris_services()

        async def slow_resolve(name):
            await gate.wait()
            return await services.resolve_city(name)

        controller = SearchController(resolve_city=slow_resolve, fetch_current=services.fetch_current)
        older = asyncio.create_task(controller.run(controller.submit("Paris")))
        await asyncio.sleep(0)
        controller.submit("")
        gate.set()
        return await older

    state = asyncio.run(scenario())

    assert state.view is SearchView.ERROR
    assert state.error_message == "Please enter a city name."
