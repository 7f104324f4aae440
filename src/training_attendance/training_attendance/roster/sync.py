from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, Protocol, Sequence, Union

from ..attendance.model import AttendanceRecord
from ..core.constants import DEFAULT_ROSTER_POLL_SECONDS
from ..core.outcomes import NotFound
from ..sessions.model import SessionStatus

logger = logging.getLogger(__name__)

RenderCallback = Callable[[Sequence[AttendanceRecord]], None]


class RosterSource(Protocol):
    def session_status(self, token: str) -> Union[SessionStatus, NotFound]:
        raise NotImplementedError


class RosterSync:
    """Polls one session's roster for the trainer's open view.

    Every tick fetches the full roster and replaces what is displayed, so lost,
    duplicated or late ticks need no reconciliation. The loop ends when the view
    calls ``stop()``, when the session is ended (after rendering the final
    roster), or when the token is unknown.
    """

    def __init__(
        self,
        source: RosterSource,
        token: str,
        render: RenderCallback,
        *,
        interval: float = DEFAULT_ROSTER_POLL_SECONDS,
        on_ended: Optional[Callable[[SessionStatus], None]] = None,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._source = source
        self._token = token
        self._render = render
        self._interval = float(interval)
        self._on_ended = on_ended

        self._lock = threading.RLock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return not self._stop.is_set() and self._thread is not None and self._thread.is_alive()

    @property
    def closed(self) -> bool:
        return self._stop.is_set()

    def start(self) -> None:
        """Render once right away, then keep polling on a daemon thread."""
        if self._thread is not None:
            raise RuntimeError("RosterSync already started")
        if not self.refresh():
            return
        self._thread = threading.Thread(target=self._run, name=f"roster-sync-{self._token}", daemon=True)
        self._thread.start()

    def stop(self, *, wait: bool = False) -> None:
        with self._lock:
            self._stop.set()
        thread = self._thread
        if wait and thread is not None and thread is not threading.current_thread():
            thread.join()

    def refresh(self) -> bool:
        """One tick. Returns False when polling should stop."""
        if self._stop.is_set():
            return False

        status = self._source.session_status(self._token)

        # The view may have closed while the fetch was in flight; drop the result.
        with self._lock:
            if self._stop.is_set():
                return False
            if isinstance(status, NotFound):
                logger.warning("Roster polling stopped: session %s not found", self._token)
                self._stop.set()
                return False
            self._render(list(status.attendees))
            if status.session.is_active:
                return True
            self._stop.set()

        logger.info("Roster polling stopped: session %s ended", self._token)
        if self._on_ended is not None:
            self._on_ended(status)
        return False

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            try:
                if not self.refresh():
                    break
            except Exception:
                # A failed tick is retried on the next one.
                logger.exception("Roster refresh failed for session %s", self._token)
