from __future__ import annotations

from typing import Any, Callable, Mapping

from ...core.enums import RejectReason
from ...sessions.model import Session
from .base import AdmissionAttempt, AdmissionRule, RuleDecision

NetworkPredicate = Callable[[Session, Mapping[str, Any]], bool]


def ssid_matches(session: Session, device_meta: Mapping[str, Any]) -> bool:
    """Default predicate: the device reports the trainer's hotspot SSID."""
    if not session.hotspot_ssid:
        return False
    reported = device_meta.get("ssid") or device_meta.get("network_id")
    return bool(reported) and str(reported).strip() == session.hotspot_ssid


class WifiRule(AdmissionRule):
    """Network presence: delegates the match to a pluggable predicate."""

    def __init__(self, predicate: NetworkPredicate = ssid_matches):
        self._predicate = predicate

    def decide(self, session: Session, attempt: AdmissionAttempt) -> RuleDecision:
        if self._predicate(session, attempt.device_meta):
            return RuleDecision.admit()
        return RuleDecision.reject(
            RejectReason.NETWORK_MISMATCH,
            "Connect to the trainer's Wi-Fi hotspot to mark attendance",
        )
