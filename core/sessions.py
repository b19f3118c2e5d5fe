"""Per-browser search sessions keyed by a cookie token."""

from __future__ import annotations

import secrets
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from core.search_controller import SearchController

SESSION_COOKIE_NAME = "weather_lookup_session"
SESSION_MAX_AGE_SECONDS = 60 * 60 * 4


@dataclass
class _SessionEntry:
    controller: SearchController
    last_seen: float


class SessionRegistry:
    """In-memory session index (cookie token -> search controller).

    Sessions idle for longer than ``max_age_seconds`` are dropped the next
    time a session is looked up or created, matching the cookie lifetime.
    """

    def __init__(
        self,
        controller_factory: Optional[Callable[[], SearchController]] = None,
        *,
        max_age_seconds: float = SESSION_MAX_AGE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._factory = controller_factory or SearchController
        self._max_age = max_age_seconds
        self._clock = clock
        self._sessions: Dict[str, _SessionEntry] = {}
        self._lock = threading.Lock()

    def create_session(self) -> Tuple[str, SearchController]:
        token = secrets.token_urlsafe(32)
        controller = self._factory()
        now = self._clock()
        with self._lock:
            self._prune(now)
            self._sessions[token] = _SessionEntry(controller, now)
        return token, controller

    def get_controller(self, token: Optional[str]) -> Optional[SearchController]:
        if not token:
            return None
        now = self._clock()
        with self._lock:
            self._prune(now)
            entry = self._sessions.get(token)
            if entry is None:
                return None
            entry.last_seen = now
            return entry.controller

    def resolve(self, token: Optional[str]) -> Tuple[str, SearchController]:
        """Return the controller for ``token``, opening a new session if unknown."""

        controller = self.get_controller(token)
        if controller is not None and token:
            return token, controller
        return self.create_session()

    def _prune(self, now: float) -> None:
        # Caller holds the lock.
        expired = [token for token, entry in self._sessions.items() if now - entry.last_seen > self._max_age]
        for token in expired:
            del self._sessions[token]

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


__all__ = ["SESSION_COOKIE_NAME", "SESSION_MAX_AGE_SECONDS", "SessionRegistry"]
