from __future__ import annotations

from ...common.geo import haversine_meters
from ...core.constants import GEOFENCE_TOLERANCE_METERS
from ...core.enums import RejectReason
from ...sessions.model import Session
from .base import AdmissionAttempt, AdmissionRule, RuleDecision


class GpsRule(AdmissionRule):
    """Geofence: the trainee must be within radius_meters of the session anchor (inclusive)."""

    def decide(self, session: Session, attempt: AdmissionAttempt) -> RuleDecision:
        if attempt.location is None:
            return RuleDecision.reject(RejectReason.LOCATION_REQUIRED, "Location is required for GPS attendance")
        if session.anchor is None or not session.radius_meters:
            # Registry refuses to create such sessions; guard rows written by other tools.
            return RuleDecision.reject(RejectReason.OUT_OF_RANGE, "Session has no geofence configured")

        distance = haversine_meters(session.anchor, attempt.location)
        if distance > session.radius_meters + GEOFENCE_TOLERANCE_METERS:
            return RuleDecision.reject(
                RejectReason.OUT_OF_RANGE,
                f"You are {distance:.1f} m away; the limit is {session.radius_meters} m",
                distance_meters=distance,
            )
        return RuleDecision.admit(distance_meters=distance)
