from __future__ import annotations

from enum import Enum


class AdmissionMode(str, Enum):
    """How a session decides that a trainee is really present."""

    GPS = "gps"
    WIFI = "wifi"
    MANUAL = "manual"


class SessionState(str, Enum):
    """Session lifecycle. ACTIVE -> ENDED only."""

    ACTIVE = "active"
    ENDED = "ended"


class RejectReason(str, Enum):
    """Why a join/admission/end request did not go through."""

    NOT_FOUND = "NOT_FOUND"
    SESSION_ENDED = "SESSION_ENDED"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    LOCATION_REQUIRED = "LOCATION_REQUIRED"
    NETWORK_MISMATCH = "NETWORK_MISMATCH"
    ALREADY_ENDED = "ALREADY_ENDED"
    RESOLUTION_FAILED = "RESOLUTION_FAILED"
    INVALID_CODE = "INVALID_CODE"


class JoinMechanism(str, Enum):
    EVENT = "event"
    SESSION = "session"
