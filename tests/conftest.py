from __future__ import annotations

import math
import threading
from datetime import datetime, timedelta, timezone

import pytest

from src.training_attendance.training_attendance.attendance.ledger import AttendanceLedger
from src.training_attendance.training_attendance.attendance.service import AdmissionGate
from src.training_attendance.training_attendance.common.geo import GeoPoint
from src.training_attendance.training_attendance.core.constants import EARTH_RADIUS_METERS
from src.training_attendance.training_attendance.database.memory import (
    InMemoryAttendanceRepository,
    InMemorySessionRepository,
    InMemoryStore,
)
from src.training_attendance.training_attendance.joining.memory_event_directory import InMemoryEventDirectory
from src.training_attendance.training_attendance.joining.resolver import CodeResolver
from src.training_attendance.training_attendance.sessions.service import SessionRegistry

ANCHOR = GeoPoint(lat=22.0797, lon=82.1391)


class TickingClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start: datetime):
        self._now = start
        self._lock = threading.Lock()

    def __call__(self) -> datetime:
        with self._lock:
            current = self._now
            self._now = current + timedelta(seconds=1)
            return current


def point_north_of(origin: GeoPoint, meters: float) -> GeoPoint:
    return GeoPoint(lat=origin.lat + math.degrees(meters / EARTH_RADIUS_METERS), lon=origin.lon)


@pytest.fixture
def clock():
    return TickingClock(datetime(2025, 3, 1, 9, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def ledger(store):
    return AttendanceLedger(InMemoryAttendanceRepository(store))


@pytest.fixture
def registry(store, ledger, clock):
    return SessionRegistry(InMemorySessionRepository(store), ledger, clock=clock)


@pytest.fixture
def gate(ledger, clock):
    return AdmissionGate(ledger, clock=clock)


@pytest.fixture
def events():
    return InMemoryEventDirectory()


@pytest.fixture
def resolver(events, registry, gate):
    return CodeResolver(events, registry, gate)


@pytest.fixture
def gps_session(registry):
    return registry.create_session("training-1", "gps", 30, ANCHOR, trainer_id="trainer-1")


@pytest.fixture
def manual_session(registry):
    return registry.create_session("training-1", "manual", None, None, trainer_id="trainer-1")


@pytest.fixture
def anchor():
    return ANCHOR


@pytest.fixture
def north_of():
    return point_north_of
