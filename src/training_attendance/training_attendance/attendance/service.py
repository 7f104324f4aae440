from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Union

from ..common.datetime_utils import utc_now
from ..common.geo import GeoPoint
from ..core.enums import AdmissionMode, RejectReason
from ..core.exceptions import SessionClosedError
from ..core.outcomes import Rejected
from ..sessions.model import Session
from .factory import AdmissionRuleFactory
from .ledger import AttendanceLedger
from .model import AttendanceRecord
from .strategies.base import AdmissionAttempt

logger = logging.getLogger(__name__)

AdmissionResult = Union[AttendanceRecord, Rejected]


class AdmissionGate:
    """Decides whether a join attempt becomes an attendance record.

    Checks run in a fixed order and the first failure wins:

    1. the session must be active;
    2. an existing record for the trainee is returned as is (idempotent);
    3. the mode's rule (geofence, network, or none) must pass.

    Only then is a record written, with ``method`` taken from the session.
    """

    def __init__(
        self,
        ledger: AttendanceLedger,
        *,
        rule_factory: AdmissionRuleFactory | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._ledger = ledger
        self._rules = rule_factory or AdmissionRuleFactory()
        self._clock = clock

    def admit(
        self,
        session: Session,
        trainee_id: str,
        method: AdmissionMode | str | None = None,
        location: Optional[GeoPoint] = None,
        device_meta: Optional[Mapping[str, Any]] = None,
        *,
        trainee_name: Optional[str] = None,
        trainee_phone: Optional[str] = None,
    ) -> AdmissionResult:
        if not session.is_active:
            return self._reject(session, trainee_id, RejectReason.SESSION_ENDED, "This attendance session has ended")

        existing = self._ledger.get(session.token, trainee_id)
        if existing is not None:
            return existing

        if method is not None and str(getattr(method, "value", method)) != session.mode.value:
            logger.debug(
                "Client claimed method=%s for %s session %s; recording session mode",
                method,
                session.mode.value,
                session.token,
            )

        attempt = AdmissionAttempt(trainee_id=trainee_id, location=location, device_meta=dict(device_meta or {}))
        decision = self._rules.for_mode(session.mode).decide(session, attempt)
        if not decision.admitted:
            return self._reject(session, trainee_id, decision.reason, decision.detail)

        record = AttendanceRecord(
            session_token=session.token,
            trainee_id=trainee_id,
            method=session.mode,
            marked_at=self._clock(),
            device_meta=attempt.device_meta,
            location=location,
            trainee_name=trainee_name,
            trainee_phone=trainee_phone,
            distance_meters=decision.distance_meters,
        )
        try:
            return self._ledger.upsert(record)
        except SessionClosedError:
            # end_session committed between our read and the write.
            return self._reject(session, trainee_id, RejectReason.SESSION_ENDED, "This attendance session has ended")

    def _reject(self, session: Session, trainee_id: str, reason: RejectReason, detail: Optional[str]) -> Rejected:
        logger.info("Admission rejected session=%s trainee=%s reason=%s", session.token, trainee_id, reason.value)
        return Rejected(reason=reason, detail=detail)
