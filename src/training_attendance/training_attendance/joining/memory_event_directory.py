from __future__ import annotations

import threading
from typing import Any, Mapping

from .model import EventJoinResult, Trainee


def _key(code: str) -> str:
    return "".join(code.split()).upper()


class InMemoryEventDirectory:
    """Event-join collaborator backed by a dict of join codes.

    Used when no events backend is configured and in tests.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._events: dict[str, Mapping[str, Any]] = {}
        self._members: dict[str, set[str]] = {}

    def register_event(self, code: str, event: Mapping[str, Any]) -> None:
        key = _key(code)
        with self._lock:
            self._events[key] = dict(event)
            self._members.setdefault(key, set())

    def members(self, code: str) -> set[str]:
        with self._lock:
            return set(self._members.get(_key(code), set()))

    def join_event_by_code(self, code: str, trainee: Trainee) -> EventJoinResult:
        key = _key(code)
        with self._lock:
            event = self._events.get(key)
            if event is None:
                return EventJoinResult.failure("Invalid event code")
            members = self._members[key]
            if trainee.trainee_id in members:
                return EventJoinResult.rejoined(event)
            members.add(trainee.trainee_id)
            return EventJoinResult.joined(event)
