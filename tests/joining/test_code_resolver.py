from __future__ import annotations

from src.training_attendance.training_attendance.core.enums import JoinMechanism, RejectReason
from src.training_attendance.training_attendance.core.outcomes import AlreadyJoined, Attended, Failed, JoinedEvent
from src.training_attendance.training_attendance.database.memory import InMemorySessionRepository
from src.training_attendance.training_attendance.joining.model import EventJoinResult, Trainee
from src.training_attendance.training_attendance.joining.resolver import CodeResolver
from src.training_attendance.training_attendance.sessions.service import SessionRegistry

ASHA = Trainee("t-1", name="Asha", phone="98765")


class RecordingEvents:
    """Event collaborator double that records every call."""

    def __init__(self, result: EventJoinResult):
        self.result = result
        self.calls = []

    def join_event_by_code(self, code, trainee):
        self.calls.append(code)
        return self.result


class RecordingRegistry:
    def __init__(self, inner):
        self.inner = inner
        self.lookups = []

    def get_session(self, token):
        self.lookups.append(token)
        return self.inner.get_session(token)


def test_event_code_joins_event(resolver, events):
    events.register_event("DRILL-7", {"id": "evt-7"})

    outcome = resolver.resolve("  drill-7 ", ASHA)

    assert outcome == JoinedEvent(event={"id": "evt-7"})


def test_rejoin_is_already_joined_not_an_error(resolver, events):
    events.register_event("DRILL-7", {"id": "evt-7"})

    first = resolver.resolve("DRILL-7", ASHA)
    second = resolver.resolve("DRILL-7", ASHA)

    assert isinstance(first, JoinedEvent)
    assert isinstance(second, AlreadyJoined)
    assert events.members("DRILL-7") == {"t-1"}


def test_event_wins_when_code_is_valid_for_both(registry, gate, events, manual_session):
    events.register_event(manual_session.token, {"id": "evt-same"})
    resolver = CodeResolver(events, registry, gate)

    outcome = resolver.resolve(manual_session.token, ASHA)

    assert isinstance(outcome, (JoinedEvent, AlreadyJoined))
    assert registry.list_attendance(manual_session.token) == []


def test_unknown_event_falls_back_to_manual_session(resolver, manual_session):
    outcome = resolver.resolve(f"  {manual_session.token}\n", ASHA)

    assert isinstance(outcome, Attended)
    assert outcome.record.session_token == manual_session.token
    assert outcome.record.trainee_name == "Asha"


def test_repeat_session_join_is_attended_with_same_record(resolver, manual_session):
    first = resolver.resolve(manual_session.token, ASHA)
    second = resolver.resolve(manual_session.token, ASHA)

    assert isinstance(second, Attended)
    assert second.record == first.record


def test_session_token_is_case_sensitive(store, ledger, gate, events, clock):
    registry = SessionRegistry(InMemorySessionRepository(store), ledger, token_factory=lambda: "AbCdEf", clock=clock)
    registry.create_session("training-1", "manual", None, None)
    resolver = CodeResolver(events, registry, gate)

    assert isinstance(resolver.resolve("AbCdEf", ASHA), Attended)
    outcome = resolver.resolve("abcdef", Trainee("t-2"))
    assert isinstance(outcome, Failed)
    assert outcome.reason == RejectReason.RESOLUTION_FAILED


def test_legacy_rejection_reason_is_preferred(resolver, gps_session, anchor, north_of):
    outcome = resolver.resolve(gps_session.token, ASHA, location=north_of(anchor, 500))

    assert isinstance(outcome, Failed)
    assert outcome.reason == RejectReason.OUT_OF_RANGE
    assert outcome.mechanism == JoinMechanism.SESSION


def test_ended_session_reports_session_ended(resolver, registry, manual_session):
    registry.end_session(manual_session.token)

    outcome = resolver.resolve(manual_session.token, ASHA)

    assert outcome.reason == RejectReason.SESSION_ENDED


def test_unknown_everywhere_is_resolution_failed(resolver):
    outcome = resolver.resolve("NOPE", ASHA)

    assert isinstance(outcome, Failed)
    assert outcome.reason == RejectReason.RESOLUTION_FAILED
    assert "Invalid event code" in outcome.detail


def test_blank_code_is_invalid_and_calls_nothing(registry, gate):
    events = RecordingEvents(EventJoinResult.failure("nope"))
    resolver = CodeResolver(events, registry, gate)

    outcome = resolver.resolve("   ", ASHA)

    assert outcome.reason == RejectReason.INVALID_CODE
    assert events.calls == []


def test_each_mechanism_is_tried_once_without_retry(registry, gate, manual_session):
    events = RecordingEvents(EventJoinResult.failure("connection reset"))
    lookups = RecordingRegistry(registry)
    resolver = CodeResolver(events, lookups, gate)

    outcome = resolver.resolve(manual_session.token, ASHA)

    assert isinstance(outcome, Attended)
    assert events.calls == [manual_session.token.upper()]
    assert lookups.lookups == [manual_session.token]


def test_event_success_skips_session_lookup(registry, gate):
    events = RecordingEvents(EventJoinResult.joined({"id": "evt-1"}))
    lookups = RecordingRegistry(registry)
    resolver = CodeResolver(events, lookups, gate)

    resolver.resolve("ABC", ASHA)

    assert lookups.lookups == []
