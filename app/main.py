"""Assemble the search controller and run an interactive terminal loop."""

from __future__ import annotations

import asyncio
import logging

from app.config import get_log_level
from app.presentation import APP_TITLE, render_text
from core.search_controller import SearchController
from tools import weather_tool


# -- Controller construction ---------------------------------------------------
def build_controller() -> SearchController:
    """Wire the controller to the live Open-Meteo clients.

    The web API builds its per-session controllers the same way, so the
    terminal loop reproduces exactly what the page would show.
    """
    return SearchController(
        resolve_city=weather_tool.resolve_city,
        fetch_current=weather_tool.fetch_current,
    )

# -- Interactive CLI loop ------------------------------------------------------
def main() -> None:
    """Read city names from stdin and print the rendered result for each."""
    logging.basicConfig(level=get_log_level())
    controller = build_controller()
    print(f"{APP_TITLE} ready. Type 'quit' or 'exit' to stop.")

    while True:
        try:
            city = input("City: ")
        except (EOFError, KeyboardInterrupt):
            print("\nExiting.")
            break

        if city.strip().lower() in {"quit", "exit"}:
            print("Goodbye!")
            break

        state = asyncio.run(controller.search(city))
        print()
        print(render_text(state))
        print()


if __name__ == "__main__":
    main()
