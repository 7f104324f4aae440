from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso, to_iso
from ..common.geo import GeoPoint
from ..common.validators import parse_location
from ..core.enums import AdmissionMode


def _freeze(meta: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(meta or {}))


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one trainee marked present in one session.

    Write-once. At most one per (session_token, trainee_id).
    """

    session_token: str
    trainee_id: str
    method: AdmissionMode
    marked_at: datetime
    device_meta: Mapping[str, Any] = field(default_factory=dict)
    location: Optional[GeoPoint] = None
    trainee_name: Optional[str] = None
    trainee_phone: Optional[str] = None
    distance_meters: Optional[float] = None
    record_id: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "device_meta", _freeze(self.device_meta))

    @property
    def key(self) -> tuple[str, str]:
        return (self.session_token, self.trainee_id)

    def to_dict(self) -> dict:
        return {
            "record_id": self.record_id,
            "session_token": self.session_token,
            "trainee_id": self.trainee_id,
            "user_name": self.trainee_name,
            "user_phone": self.trainee_phone,
            "method": self.method.value,
            "device_meta": dict(self.device_meta),
            "location": self.location.to_dict() if self.location else None,
            "distance_m": self.distance_meters,
            "marked_at": to_iso(self.marked_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AttendanceRecord":
        return cls(
            session_token=data["session_token"],
            trainee_id=data["trainee_id"],
            method=AdmissionMode(data["method"]),
            marked_at=parse_iso(data["marked_at"]),
            device_meta=data.get("device_meta") or {},
            location=parse_location(data.get("location")),
            trainee_name=data.get("user_name"),
            trainee_phone=data.get("user_phone"),
            distance_meters=data.get("distance_m"),
            record_id=data.get("record_id"),
        )
