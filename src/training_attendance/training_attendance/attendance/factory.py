from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import AdmissionMode
from .strategies.base import AdmissionRule
from .strategies.gps_rule import GpsRule
from .strategies.manual_rule import ManualRule
from .strategies.wifi_rule import NetworkPredicate, WifiRule, ssid_matches


@dataclass
class AdmissionRuleFactory:
    """Factory Pattern: choose the admission rule for a session's mode."""

    network_predicate: NetworkPredicate = field(default=ssid_matches)

    def for_mode(self, mode: AdmissionMode) -> AdmissionRule:
        if mode == AdmissionMode.GPS:
            return GpsRule()
        if mode == AdmissionMode.WIFI:
            return WifiRule(self.network_predicate)
        return ManualRule()
