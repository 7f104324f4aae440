"""In-process store used for local runs and tests.

Sessions and attendance share one lock so that an admission's "session still
active" check and its insert are atomic with respect to ending the session.
"""
from __future__ import annotations

import itertools
import threading
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..core.enums import SessionState
from ..core.exceptions import SessionClosedError
from ..sessions.model import Session


class InMemoryStore:
    def __init__(self):
        self.lock = threading.RLock()
        self.sessions: dict[str, Session] = {}
        self.records: dict[tuple[str, str], AttendanceRecord] = {}
        self.sequence = itertools.count(1)


class InMemorySessionRepository:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def add(self, session: Session) -> bool:
        with self._store.lock:
            if session.token in self._store.sessions:
                return False
            self._store.sessions[session.token] = session
            return True

    def get(self, token: str) -> Optional[Session]:
        with self._store.lock:
            return self._store.sessions.get(token)

    def mark_ended(self, token: str, ended_at: datetime) -> bool:
        with self._store.lock:
            current = self._store.sessions.get(token)
            if current is None or current.state != SessionState.ACTIVE:
                return False
            self._store.sessions[token] = replace(current, state=SessionState.ENDED, ended_at=ended_at)
            return True

    def list_active_for_trainer(self, trainer_id: str) -> Sequence[Session]:
        with self._store.lock:
            items = [
                s
                for s in self._store.sessions.values()
                if s.trainer_id == trainer_id and s.state == SessionState.ACTIVE
            ]
        items.sort(key=lambda s: s.started_at, reverse=True)
        return items

    def list_for_training(self, training_ref: str) -> Sequence[Session]:
        with self._store.lock:
            items = [s for s in self._store.sessions.values() if s.training_ref == training_ref]
        items.sort(key=lambda s: s.started_at, reverse=True)
        return items


class InMemoryAttendanceRepository:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def insert_if_absent(self, record: AttendanceRecord) -> tuple[AttendanceRecord, bool]:
        with self._store.lock:
            existing = self._store.records.get(record.key)
            if existing is not None:
                return existing, False

            session = self._store.sessions.get(record.session_token)
            if session is None or session.state != SessionState.ACTIVE:
                raise SessionClosedError(record.session_token)

            stored = replace(record, record_id=next(self._store.sequence))
            self._store.records[record.key] = stored
            return stored, True

    def get(self, session_token: str, trainee_id: str) -> Optional[AttendanceRecord]:
        with self._store.lock:
            return self._store.records.get((session_token, trainee_id))

    def count_for(self, session_token: str) -> int:
        with self._store.lock:
            return sum(1 for token, _ in self._store.records if token == session_token)

    def list_for(self, session_token: str) -> Sequence[AttendanceRecord]:
        with self._store.lock:
            items = [r for r in self._store.records.values() if r.session_token == session_token]
        items.sort(key=lambda r: (r.marked_at, r.record_id))
        return items
