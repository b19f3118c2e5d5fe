import pytest

from app.presentation import build_page_view, format_number, render_page, render_text
from core.icons import IconVariant
from core.models import Location, WeatherSnapshot
from core.search_state import SearchState, SearchView

PARIS = Location(name="Paris", country="France", latitude=48.8566, longitude=2.3522)
OVERCAST = WeatherSnapshot(temperature_c=18.5, relative_humidity_pct=60.0, wind_speed_kmh=12.4, weather_code=3)
RESULT = SearchState(location=PARIS, weather=OVERCAST)


@pytest.mark.parametrize(
    "value, expected",
    [
        (60.0, "60"),
        (18.5, "18.5"),
        (-3.0, "-3"),
        (0.0, "0"),
        (12.4, "12.4"),
        (7, "7"),
        (0.00001, "0.00001"),
        (-0.000025, "-0.000025"),
        (1e16, "10000000000000000"),
        (1.5e-7, "0.00000015"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_idle_page_shows_form_only():
    html = render_page(SearchState())

    assert 'data-view="idle"' in html
    assert 'placeholder="Enter city name..."' in html
    assert "error-box" not in html
    assert "spinner" not in html.split("<body>", 1)[1]
    assert 'http-equiv="refresh"' not in html


def test_loading_page_disables_form_and_refreshes():
    page = build_page_view(SearchState(query_text="Paris", loading=True))
    html = render_page(SearchState(query_text="Paris", loading=True), refresh_seconds=2)

    assert page.input_disabled
    assert page.card is None
    assert 'content="2"' in html
    assert 'class="spinner"' in html
    assert "disabled" in html


def test_error_page_shows_message_verbatim_and_escaped():
    state = SearchState(query_text="<b>", error_message="City not found. Please try another city.")

    html = render_page(state)

    assert '<div class="error-box">City not found. Please try another city.</div>' in html
    assert 'value="&lt;b&gt;"' in html


def test_error_view_hides_leftover_result():
    page = build_page_view(SearchState(error_message="Failed to fetch weather data.", location=PARIS, weather=OVERCAST))

    assert page.view is SearchView.ERROR
    assert page.card is None


def test_result_card_layout():
    page = build_page_view(RESULT)
    html = render_page(RESULT)

    assert page.card.icon is IconVariant.CLOUD
    for text in ("Paris, France", "18.5°C", "Overcast", "60%", "12.4 km/h", "Humidity", "Wind Speed"):
        assert text in html
    assert html.index("Paris, France") < html.index("18.5°C") < html.index("Overcast") < html.index("60%") < html.index("12.4 km/h")
    assert 'data-icon="cloud"' in html


def test_unknown_code_uses_fallbacks():
    state = SearchState(location=PARIS, weather=WeatherSnapshot(10.0, 50.0, 3.0, 42))

    card = build_page_view(state).card

    assert card.description == "Unknown weather condition"
    assert card.icon is IconVariant.DEFAULT_CLOUD


def test_render_text_for_each_view():
    assert render_text(SearchState()) == ""
    assert render_text(SearchState(loading=True)) == "Loading..."
    assert render_text(SearchState(error_message="Please enter a city name.")) == "Error: Please enter a city name."
    assert render_text(RESULT).splitlines() == [
        "Paris, France",
        "☁  18.5°C  Overcast",
        "Humidity: 60%",
        "Wind Speed: 12.4 km/h",
    ]
