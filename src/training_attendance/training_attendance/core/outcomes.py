"""Typed outcomes for expected, non-exceptional results.

Idempotent successes (already joined, already attended) are success types of
their own; callers never have to inspect a failure to find them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from .enums import JoinMechanism, RejectReason

if TYPE_CHECKING:
    from ..attendance.model import AttendanceRecord
    from ..sessions.model import Session


@dataclass(frozen=True)
class NotFound:
    token: str
    reason: RejectReason = RejectReason.NOT_FOUND


@dataclass(frozen=True)
class AlreadyEnded:
    session: "Session"
    reason: RejectReason = RejectReason.ALREADY_ENDED


@dataclass(frozen=True)
class Rejected:
    reason: RejectReason
    detail: Optional[str] = None


@dataclass(frozen=True)
class JoinedEvent:
    event: Mapping[str, Any]
    mechanism: JoinMechanism = JoinMechanism.EVENT


@dataclass(frozen=True)
class AlreadyJoined:
    event: Mapping[str, Any]
    mechanism: JoinMechanism = JoinMechanism.EVENT


@dataclass(frozen=True)
class Attended:
    record: "AttendanceRecord"
    mechanism: JoinMechanism = JoinMechanism.SESSION


@dataclass(frozen=True)
class Failed:
    reason: RejectReason
    mechanism: Optional[JoinMechanism] = None
    detail: Optional[str] = None


JoinOutcome = Union[JoinedEvent, AlreadyJoined, Attended, Failed]
