"""Render the weather page as a pure function of ``SearchState``.

``build_page_view`` does all of the formatting so the Jinja template and the
terminal renderer only lay out strings. Nothing here keeps state between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.config import get_loading_refresh_seconds
from core.icons import IconVariant
from core.models import Location, WeatherSnapshot
from core.search_state import SearchState, SearchView, view_of

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
STATIC_DIR = Path(__file__).resolve().parent / "static"

APP_TITLE = "Weather App"
INPUT_PLACEHOLDER = "Enter city name..."

_environment = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)


@dataclass(frozen=True)
class ResultCard:
    location_label: str
    icon: IconVariant
    temperature: str
    description: str
    humidity: str
    wind_speed: str


@dataclass(frozen=True)
class PageView:
    view: SearchView
    query_text: str
    input_disabled: bool
    error_message: Optional[str] = None
    card: Optional[ResultCard] = None
    title: str = APP_TITLE
    placeholder: str = INPUT_PLACEHOLDER


def format_number(value: float) -> str:
    """Print ``value`` the way the provider sent it (``60.0`` -> ``"60"``)."""

    number = float(value)
    if number.is_integer():
        return str(int(number))
    text = repr(number)
    if "e" in text:
        # Shortest round-trip digits, but never in exponent form.
        text = format(Decimal(text), "f")
    return text


def build_result_card(location: Location, weather: WeatherSnapshot) -> ResultCard:
    return ResultCard(
        location_label=location.label,
        icon=weather.icon,
        temperature=f"{format_number(weather.temperature_c)}°C",
        description=weather.description,
        humidity=f"{format_number(weather.relative_humidity_pct)}%",
        wind_speed=f"{format_number(weather.wind_speed_kmh)} km/h",
    )


def build_page_view(state: SearchState) -> PageView:
    view = view_of(state)
    card = None
    if view is SearchView.RESULT:
        card = build_result_card(state.location, state.weather)
    return PageView(
        view=view,
        query_text=state.query_text,
        input_disabled=view is SearchView.LOADING,
        error_message=state.error_message if view is SearchView.ERROR else None,
        card=card,
    )


def render_page(state: SearchState, *, refresh_seconds: Optional[int] = None) -> str:
    """Return the full HTML document for ``state``."""

    page = build_page_view(state)
    if page.view is SearchView.LOADING and refresh_seconds is None:
        refresh_seconds = get_loading_refresh_seconds()
    template = _environment.get_template("index.html")
    return template.render(
        page=page,
        views=SearchView,
        refresh_seconds=refresh_seconds if page.view is SearchView.LOADING else None,
    )


def render_text(state: SearchState) -> str:
    """Plain-text rendering used by the terminal driver."""

    page = build_page_view(state)
    if page.view is SearchView.LOADING:
        return "Loading..."
    if page.view is SearchView.ERROR:
        return f"Error: {page.error_message}"
    if page.card is None:
        return ""

    card = page.card
    return "\n".join(
        [
            card.location_label,
            f"{card.icon.glyph}  {card.temperature}  {card.description}",
            f"Humidity: {card.humidity}",
            f"Wind Speed: {card.wind_speed}",
        ]
    )


__all__ = [
    "PageView",
    "ResultCard",
    "STATIC_DIR",
    "build_page_view",
    "build_result_card",
    "format_number",
    "render_page",
    "render_text",
]
