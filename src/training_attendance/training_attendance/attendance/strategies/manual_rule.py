from __future__ import annotations

from ...sessions.model import Session
from .base import AdmissionAttempt, AdmissionRule, RuleDecision


class ManualRule(AdmissionRule):
    """No presence check; the trainer vouches for whoever has the code."""

    def decide(self, session: Session, attempt: AdmissionAttempt) -> RuleDecision:
        return RuleDecision.admit()
