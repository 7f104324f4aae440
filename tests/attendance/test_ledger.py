from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, timezone

import pytest

from src.training_attendance.training_attendance.attendance.model import AttendanceRecord
from src.training_attendance.training_attendance.core.enums import AdmissionMode
from src.training_attendance.training_attendance.core.exceptions import SessionClosedError

T0 = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


def _record(token: str, trainee_id: str, *, seconds: int = 0, **kwargs) -> AttendanceRecord:
    return AttendanceRecord(
        session_token=token,
        trainee_id=trainee_id,
        method=AdmissionMode.MANUAL,
        marked_at=T0 + timedelta(seconds=seconds),
        **kwargs,
    )


def test_upsert_never_overwrites(ledger, manual_session):
    first = ledger.upsert(_record(manual_session.token, "t-1", device_meta={"os": "android"}))
    again = ledger.upsert(_record(manual_session.token, "t-1", seconds=60, device_meta={"os": "ios"}))

    assert again == first
    assert again.marked_at == T0
    assert again.device_meta["os"] == "android"
    assert ledger.count_for(manual_session.token) == 1


def test_records_are_immutable(ledger, manual_session):
    stored = ledger.upsert(_record(manual_session.token, "t-1", device_meta={"os": "android"}))

    with pytest.raises(FrozenInstanceError):
        stored.trainee_id = "someone-else"
    with pytest.raises(TypeError):
        stored.device_meta["os"] = "ios"


def test_upsert_into_ended_session_raises(ledger, registry, manual_session):
    registry.end_session(manual_session.token)

    with pytest.raises(SessionClosedError):
        ledger.upsert(_record(manual_session.token, "t-1"))


def test_upsert_into_unknown_session_raises(ledger):
    with pytest.raises(SessionClosedError):
        ledger.upsert(_record("nope", "t-1"))


def test_list_for_orders_by_marked_at(ledger, manual_session):
    ledger.upsert(_record(manual_session.token, "late", seconds=30))
    ledger.upsert(_record(manual_session.token, "early", seconds=10))
    ledger.upsert(_record(manual_session.token, "middle", seconds=20))

    assert [r.trainee_id for r in ledger.list_for(manual_session.token)] == ["early", "middle", "late"]


def test_list_for_is_scoped_to_session(ledger, registry, manual_session):
    other = registry.create_session("training-2", "manual", None, None)
    ledger.upsert(_record(manual_session.token, "t-1"))
    ledger.upsert(_record(other.token, "t-1"))

    assert ledger.count_for(manual_session.token) == 1
    assert ledger.count_for(other.token) == 1
    assert [r.session_token for r in ledger.list_for(other.token)] == [other.token]


def test_concurrent_upserts_resolve_to_one_record(ledger, manual_session):
    drafts = [_record(manual_session.token, "t-1", seconds=i) for i in range(50)]

    with ThreadPoolExecutor(max_workers=10) as pool:
        stored = list(pool.map(ledger.upsert, drafts))

    assert len({r.record_id for r in stored}) == 1
    assert len({r.marked_at for r in stored}) == 1
    assert ledger.count_for(manual_session.token) == 1
