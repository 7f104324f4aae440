from __future__ import annotations

import logging
import secrets
from datetime import datetime
from typing import Any, Callable, Optional, Sequence, Union

from ..attendance.ledger import AttendanceLedger
from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import utc_now
from ..common.validators import optional_str, parse_location, parse_mode, require_non_empty, require_positive_int
from ..core.constants import DEFAULT_TOKEN_BYTES, MAX_TOKEN_ATTEMPTS
from ..core.enums import AdmissionMode, SessionState
from ..core.exceptions import PersistenceError, ValidationError
from ..core.outcomes import AlreadyEnded, NotFound
from .model import Session, SessionStatus
from .repository import SessionRepository

logger = logging.getLogger(__name__)

EndResult = Union[Session, NotFound, AlreadyEnded]
StatusResult = Union[SessionStatus, NotFound]


def generate_token(nbytes: int = DEFAULT_TOKEN_BYTES) -> str:
    return secrets.token_urlsafe(nbytes)


class SessionRegistry:
    """Owns the session lifecycle: create, look up, end.

    Reads attendance through the ledger but never writes it.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        ledger: AttendanceLedger,
        *,
        token_factory: Callable[[], str] = generate_token,
        clock: Callable[[], datetime] = utc_now,
        max_token_attempts: int = MAX_TOKEN_ATTEMPTS,
    ):
        self._sessions = sessions
        self._ledger = ledger
        self._token_factory = token_factory
        self._clock = clock
        self._max_token_attempts = int(max_token_attempts)

    def create_session(
        self,
        training_ref: str,
        mode: AdmissionMode | str,
        radius_meters: Any = None,
        anchor: Any = None,
        *,
        trainer_id: Optional[str] = None,
        hotspot_ssid: Optional[str] = None,
        trainer_device: Optional[str] = None,
        trainer_ip: Optional[str] = None,
    ) -> Session:
        training_ref = require_non_empty(training_ref, "training_id")
        mode = parse_mode(mode)
        anchor = parse_location(anchor)

        if mode == AdmissionMode.GPS:
            radius_meters = require_positive_int(radius_meters, "radius_m")
            if anchor is None:
                raise ValidationError("location is required for GPS sessions")
        elif radius_meters is not None:
            radius_meters = require_positive_int(radius_meters, "radius_m")

        started_at = self._clock()
        for _ in range(self._max_token_attempts):
            session = Session(
                token=self._token_factory(),
                training_ref=training_ref,
                mode=mode,
                radius_meters=radius_meters,
                anchor=anchor,
                state=SessionState.ACTIVE,
                started_at=started_at,
                trainer_id=optional_str(trainer_id),
                hotspot_ssid=optional_str(hotspot_ssid),
                trainer_device=optional_str(trainer_device),
                trainer_ip=optional_str(trainer_ip),
            )
            if self._sessions.add(session):
                logger.info(
                    "Session %s created training=%s mode=%s radius=%s",
                    session.token,
                    training_ref,
                    mode.value,
                    radius_meters,
                )
                return session
            logger.warning("Session token collision, re-rolling")

        raise PersistenceError(f"Could not allocate a unique session token after {self._max_token_attempts} attempts")

    def get_session(self, token: str) -> Optional[Session]:
        return self._sessions.get(token)

    def end_session(self, token: str) -> EndResult:
        if self._sessions.mark_ended(token, self._clock()):
            session = self._sessions.get(token)
            logger.info("Session %s ended with %d attendees", token, self._ledger.count_for(token))
            return session

        session = self._sessions.get(token)
        if session is None:
            return NotFound(token=token)
        logger.warning("Session %s end requested but it already ended at %s", token, session.ended_at)
        return AlreadyEnded(session=session)

    def list_attendance(self, token: str) -> Sequence[AttendanceRecord]:
        return self._ledger.list_for(token)

    def session_status(self, token: str) -> StatusResult:
        session = self._sessions.get(token)
        if session is None:
            return NotFound(token=token)
        return SessionStatus(session=session, attendees=tuple(self._ledger.list_for(token)))

    def attendee_count(self, token: str) -> int:
        return self._ledger.count_for(token)

    def list_active_sessions(self, trainer_id: str) -> Sequence[Session]:
        return list(self._sessions.list_active_for_trainer(require_non_empty(trainer_id, "trainer_id")))

    def list_training_sessions(self, training_ref: str) -> Sequence[Session]:
        return list(self._sessions.list_for_training(require_non_empty(training_ref, "training_id")))
