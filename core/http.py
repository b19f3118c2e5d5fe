"""Shared ``requests`` session for the Open-Meteo clients."""

from __future__ import annotations

from typing import Optional

import requests

from app.config import get_http_timeout, get_user_agent

_session: Optional[requests.Session] = None


def build_session(user_agent: str | None = None) -> requests.Session:
    session = requests.Session()
    session.headers.update({
        "User-Agent": user_agent or get_user_agent(),
        "Accept": "application/json",
    })
    return session


def get_session() -> requests.Session:
    """Return the process-wide session, creating it on first use."""

    global _session
    if _session is None:
        _session = build_session()
    return _session


def get(url: str, **kwargs) -> requests.Response:
    # Wrapper around session.get with the configured timeout
    kwargs.setdefault("timeout", get_http_timeout())
    return get_session().get(url, **kwargs)


__all__ = ["build_session", "get", "get_session"]
