"""FastAPI application serving the weather search page and its JSON API."""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import BackgroundTasks, FastAPI, Form, Request, Response
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from app.config import get_log_level, get_web_ui_host, get_web_ui_port
from app.presentation import STATIC_DIR, build_page_view, render_page
from core.search_controller import SearchController
from core.search_state import SearchState, SearchView
from core.sessions import SESSION_COOKIE_NAME, SESSION_MAX_AGE_SECONDS, SessionRegistry

logger = logging.getLogger(__name__)


class SearchRequest(BaseModel):
    city: str = ""


def _format_state(state: SearchState) -> Dict[str, Any]:
    """Reshape ``SearchState`` into the JSON schema shared by the API routes."""

    page = build_page_view(state)
    result: Optional[Dict[str, Any]] = None
    if page.view is SearchView.RESULT and page.card is not None:
        card = page.card
        result = {
            "location": asdict(state.location),
            "weather": asdict(state.weather),
            "location_label": card.location_label,
            "icon": card.icon.slug,
            "temperature": card.temperature,
            "description": card.description,
            "humidity": card.humidity,
            "wind_speed": card.wind_speed,
        }
    return {
        "view": page.view.value,
        "query": state.query_text,
        "loading": state.loading,
        "error": page.error_message,
        "result": result,
    }


def _remember_session(response: Response, token: str) -> None:
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        httponly=True,
        secure=False,
        samesite="lax",
        max_age=SESSION_MAX_AGE_SECONDS,
    )


def create_app(
    sessions: Optional[SessionRegistry] = None,
    *,
    static_dir: Optional[Path] = None,
) -> FastAPI:
    """Build the FastAPI app.

    ``sessions`` lets tests inject controllers wired to fake clients; the
    default registry builds controllers that talk to Open-Meteo.
    """

    app = FastAPI(title="Weather Lookup", version="1.0.0")
    app.state.sessions = sessions if sessions is not None else SessionRegistry()
    app.mount("/static", StaticFiles(directory=static_dir or STATIC_DIR, check_dir=False), name="static")

    def _session_for(request: Request) -> tuple[str, SearchController]:
        return app.state.sessions.resolve(request.cookies.get(SESSION_COOKIE_NAME))

    @app.get("/", response_class=HTMLResponse)
    def root(request: Request) -> HTMLResponse:
        token, controller = _session_for(request)
        response = HTMLResponse(render_page(controller.state))
        _remember_session(response, token)
        return response

    @app.post("/search")
    async def submit_search(
        request: Request,
        background_tasks: BackgroundTasks,
        city: str = Form(""),
    ) -> RedirectResponse:
        """Accept the form post, start the lookup, and send the browser back to ``/``.

        The lookup runs as a background task after the redirect is sent, so
        the next page load shows the loading view until it completes.
        """
        token, controller = _session_for(request)
        pending = controller.submit(city)
        if pending is not None:
            background_tasks.add_task(controller.run, pending)
        response = RedirectResponse("/", status_code=303)
        _remember_session(response, token)
        return response

    @app.get("/api/state")
    def get_state(request: Request, response: Response) -> Dict[str, Any]:
        token, controller = _session_for(request)
        _remember_session(response, token)
        return _format_state(controller.state)

    @app.post("/api/search")
    async def api_search(payload: SearchRequest, request: Request, response: Response) -> Dict[str, Any]:
        token, controller = _session_for(request)
        _remember_session(response, token)
        state = await controller.search(payload.city)
        return _format_state(state)

    @app.get("/api/health")
    def health_check() -> Dict[str, Any]:
        return {
            "status": "ok",
            "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        }

    return app


app = create_app()


def main() -> None:
    import uvicorn

    logging.basicConfig(level=get_log_level())
    logger.info("Serving weather lookup on %s:%d", get_web_ui_host(), get_web_ui_port())
    uvicorn.run(
        "app.web_api:app",
        host=get_web_ui_host(),
        port=get_web_ui_port(),
        reload=False,
    )


if __name__ == "__main__":
    main()
