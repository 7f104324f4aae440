from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import parse_iso, to_iso
from ..common.geo import GeoPoint
from ..common.validators import parse_location
from ..core.enums import AdmissionMode, SessionState


@dataclass(frozen=True)
class Session:
    """Domain entity: an attendance window opened by a trainer.

    The token is both the join code shown to trainees and the primary key.
    """

    token: str
    training_ref: str
    mode: AdmissionMode
    radius_meters: Optional[int]
    anchor: Optional[GeoPoint]
    state: SessionState
    started_at: datetime
    ended_at: Optional[datetime] = None
    trainer_id: Optional[str] = None
    hotspot_ssid: Optional[str] = None
    trainer_device: Optional[str] = None
    trainer_ip: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    def to_dict(self) -> dict:
        return {
            "session_token": self.token,
            "training_id": self.training_ref,
            "mode": self.mode.value,
            "radius_m": self.radius_meters,
            "location": self.anchor.to_dict() if self.anchor else None,
            "state": self.state.value,
            "is_active": self.is_active,
            "started_at": to_iso(self.started_at),
            "ended_at": to_iso(self.ended_at),
            "trainer_id": self.trainer_id,
            "hotspot_ssid": self.hotspot_ssid,
            "trainer_device": self.trainer_device,
            "trainer_ip": self.trainer_ip,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Session":
        return cls(
            token=data["session_token"],
            training_ref=data["training_id"],
            mode=AdmissionMode(data["mode"]),
            radius_meters=data.get("radius_m"),
            anchor=parse_location(data.get("location")),
            state=SessionState(data["state"]),
            started_at=parse_iso(data["started_at"]),
            ended_at=parse_iso(data.get("ended_at")),
            trainer_id=data.get("trainer_id"),
            hotspot_ssid=data.get("hotspot_ssid"),
            trainer_device=data.get("trainer_device"),
            trainer_ip=data.get("trainer_ip"),
        )


@dataclass(frozen=True)
class SessionStatus:
    """Read-model for the trainer's live view: the session plus its roster."""

    session: Session
    attendees: Sequence[AttendanceRecord] = field(default_factory=tuple)

    @property
    def count(self) -> int:
        return len(self.attendees)

    def to_dict(self) -> dict:
        return {
            "session": self.session.to_dict(),
            "attendees": [r.to_dict() for r in self.attendees],
            "count": self.count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SessionStatus":
        return cls(
            session=Session.from_dict(data["session"]),
            attendees=tuple(AttendanceRecord.from_dict(r) for r in data.get("attendees") or []),
        )
