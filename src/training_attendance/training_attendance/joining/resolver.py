from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..attendance.service import AdmissionGate
from ..common.geo import GeoPoint
from ..core.enums import JoinMechanism, RejectReason
from ..core.outcomes import AlreadyJoined, Attended, Failed, JoinedEvent, JoinOutcome, Rejected
from ..sessions.service import SessionRegistry
from .event_client import EventJoinClient
from .model import Trainee

logger = logging.getLogger(__name__)


def normalize_event_code(raw: str) -> str:
    """Event codes are case-insensitive and may be typed with inner spaces."""
    return "".join(raw.split()).upper()


def normalize_session_token(raw: str) -> str:
    """Session tokens are case-sensitive; only surrounding whitespace is dropped."""
    return raw.strip()


class CodeResolver:
    """Turns one scanned or typed code into a join outcome.

    The Event mechanism is always tried first; only if it does not accept the
    code is the code treated as a legacy attendance session token. Each
    mechanism is called at most once per ``resolve`` and never concurrently.
    """

    def __init__(self, events: EventJoinClient, registry: SessionRegistry, gate: AdmissionGate):
        self._events = events
        self._registry = registry
        self._gate = gate

    def resolve(
        self,
        raw_code: Optional[str],
        trainee: Trainee,
        *,
        location: Optional[GeoPoint] = None,
        device_meta: Optional[Mapping[str, Any]] = None,
    ) -> JoinOutcome:
        if raw_code is None or not raw_code.strip():
            return Failed(reason=RejectReason.INVALID_CODE, detail="Please enter a session code")

        joined = self._events.join_event_by_code(normalize_event_code(raw_code), trainee)
        if joined.success:
            event = joined.event or {}
            if joined.already_joined:
                return AlreadyJoined(event=event)
            return JoinedEvent(event=event)

        token = normalize_session_token(raw_code)
        logger.debug("Event join declined code for trainee=%s (%s); trying session token", trainee.trainee_id, joined.error)

        session = self._registry.get_session(token)
        if session is None:
            return Failed(
                reason=RejectReason.RESOLUTION_FAILED,
                mechanism=JoinMechanism.SESSION,
                detail=f"No event or attendance session matches this code (event: {joined.error or 'not found'})",
            )

        result = self._gate.admit(
            session,
            trainee.trainee_id,
            session.mode,
            location,
            device_meta,
            trainee_name=trainee.name,
            trainee_phone=trainee.phone,
        )
        if isinstance(result, Rejected):
            return Failed(reason=result.reason, mechanism=JoinMechanism.SESSION, detail=result.detail)
        return Attended(record=result)
