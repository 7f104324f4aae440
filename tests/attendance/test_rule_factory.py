from datetime import datetime, timezone

from src.training_attendance.training_attendance.attendance.factory import AdmissionRuleFactory
from src.training_attendance.training_attendance.attendance.strategies.base import AdmissionAttempt
from src.training_attendance.training_attendance.attendance.strategies.gps_rule import GpsRule
from src.training_attendance.training_attendance.attendance.strategies.manual_rule import ManualRule
from src.training_attendance.training_attendance.attendance.strategies.wifi_rule import WifiRule, ssid_matches
from src.training_attendance.training_attendance.core.enums import AdmissionMode, RejectReason, SessionState
from src.training_attendance.training_attendance.sessions.model import Session


def _session(mode, **kwargs):
    return Session(
        token="tok",
        training_ref="tr",
        mode=mode,
        radius_meters=kwargs.pop("radius_meters", None),
        anchor=kwargs.pop("anchor", None),
        state=SessionState.ACTIVE,
        started_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        **kwargs,
    )


def test_factory_picks_rule_per_mode():
    factory = AdmissionRuleFactory()

    assert isinstance(factory.for_mode(AdmissionMode.GPS), GpsRule)
    assert isinstance(factory.for_mode(AdmissionMode.WIFI), WifiRule)
    assert isinstance(factory.for_mode(AdmissionMode.MANUAL), ManualRule)


def test_gps_rule_checks_location_first():
    decision = GpsRule().decide(_session(AdmissionMode.GPS), AdmissionAttempt("t", location=None))
    assert decision.reason == RejectReason.LOCATION_REQUIRED


def test_ssid_match_ignores_surrounding_whitespace_but_not_case():
    session = _session(AdmissionMode.WIFI, hotspot_ssid="FieldNet")

    assert ssid_matches(session, {"ssid": " FieldNet "})
    assert ssid_matches(session, {"network_id": "FieldNet"})
    assert not ssid_matches(session, {"ssid": "fieldnet"})
    assert not ssid_matches(session, {})


def test_ssid_match_fails_when_session_has_no_hotspot():
    assert not ssid_matches(_session(AdmissionMode.WIFI), {"ssid": "anything"})
