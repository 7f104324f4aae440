from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ...common.geo import GeoPoint
from ...core.enums import RejectReason
from ...sessions.model import Session


@dataclass(frozen=True)
class AdmissionAttempt:
    trainee_id: str
    location: Optional[GeoPoint] = None
    device_meta: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RuleDecision:
    admitted: bool
    reason: Optional[RejectReason] = None
    detail: Optional[str] = None
    distance_meters: Optional[float] = None

    @classmethod
    def admit(cls, *, distance_meters: Optional[float] = None) -> "RuleDecision":
        return cls(admitted=True, distance_meters=distance_meters)

    @classmethod
    def reject(cls, reason: RejectReason, detail: str, *, distance_meters: Optional[float] = None) -> "RuleDecision":
        return cls(admitted=False, reason=reason, detail=detail, distance_meters=distance_meters)


class AdmissionRule(ABC):
    """Strategy Pattern: the presence check for one admission mode."""

    @abstractmethod
    def decide(self, session: Session, attempt: AdmissionAttempt) -> RuleDecision:
        raise NotImplementedError
