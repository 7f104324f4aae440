import pytest

from src.training_attendance.training_attendance.core.exceptions import PersistenceError
from src.training_attendance.training_attendance.core.outcomes import NotFound
from src.training_attendance.training_attendance.roster.api_client import AttendanceApiClient

STATUS = {
    "success": True,
    "session": {
        "session_token": "tok-1",
        "training_id": "training-1",
        "mode": "manual",
        "radius_m": None,
        "location": None,
        "state": "active",
        "started_at": "2025-03-01T09:00:00+00:00",
        "ended_at": None,
    },
    "attendees": [
        {
            "session_token": "tok-1",
            "trainee_id": "t-1",
            "user_name": "Asha",
            "method": "manual",
            "marked_at": "2025-03-01T09:01:00+00:00",
        }
    ],
    "count": 1,
}


class FakeResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self.ok = status_code < 400
        self._payload = payload

    def json(self):
        return self._payload


class FakeHttp:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        return self.response


def test_parses_status_payload():
    http = FakeHttp(FakeResponse(200, STATUS))
    client = AttendanceApiClient("http://localhost:5000/", access_token="secret", http=http)

    status = client.session_status("tok-1")

    assert status.session.token == "tok-1"
    assert status.session.is_active
    assert [r.trainee_name for r in status.attendees] == ["Asha"]
    url, kwargs = http.calls[0]
    assert url == "http://localhost:5000/api/attendance/sessions/tok-1/status"
    assert kwargs["headers"] == {"Authorization": "Bearer secret"}


def test_unknown_session_is_not_found():
    client = AttendanceApiClient("http://localhost:5000", http=FakeHttp(FakeResponse(404, {"success": False})))

    assert client.session_status("nope") == NotFound(token="nope")


def test_server_error_raises():
    client = AttendanceApiClient("http://localhost:5000", http=FakeHttp(FakeResponse(503, {"success": False})))

    with pytest.raises(PersistenceError):
        client.session_status("tok-1")
