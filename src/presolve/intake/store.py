"""In-memory store for filing sessions."""

from __future__ import annotations

import logging
import time
from typing import Callable

from presolve.intake.controller import IntakeController

logger = logging.getLogger(__name__)


class FilingStore:
    """In-memory dict of live filing controllers, keyed by session id.

    Suitable for single-instance deployment; nothing survives a restart.
    Sessions not read for ``idle_seconds`` are evicted the next time a
    session is created or :meth:`prune` runs. ``None`` keeps them forever.
    """

    def __init__(
        self,
        factory: Callable[[], IntakeController],
        idle_seconds: float | None = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._factory = factory
        self._idle_seconds = idle_seconds
        self._clock = clock
        self._filings: dict[str, IntakeController] = {}
        self._last_seen: dict[str, float] = {}

    def create(self) -> IntakeController:
        self.prune()
        controller = self._factory()
        self._filings[controller.session_id] = controller
        self._last_seen[controller.session_id] = self._clock()
        return controller

    def get(self, session_id: str) -> IntakeController | None:
        controller = self._filings.get(session_id)
        if controller is None:
            return None
        if self._expired(session_id, self._clock()) and not controller.submitting:
            self.remove(session_id)
            return None
        self._last_seen[session_id] = self._clock()
        return controller

    def remove(self, session_id: str) -> bool:
        self._last_seen.pop(session_id, None)
        return self._filings.pop(session_id, None) is not None

    def prune(self) -> int:
        """Evict idle sessions, skipping any still submitting. Returns the count."""
        now = self._clock()
        stale = [
            sid
            for sid, controller in self._filings.items()
            if self._expired(sid, now) and not controller.submitting
        ]
        for sid in stale:
            self.remove(sid)
        if stale:
            logger.debug("Evicted %d idle filing sessions", len(stale))
        return len(stale)

    def _expired(self, session_id: str, now: float) -> bool:
        if self._idle_seconds is None:
            return False
        return now - self._last_seen[session_id] > self._idle_seconds

    def __len__(self) -> int:
        return len(self._filings)
