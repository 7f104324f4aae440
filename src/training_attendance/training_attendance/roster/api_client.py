from __future__ import annotations

from typing import Union

import requests

from ..core.constants import DEFAULT_EVENT_SERVICE_TIMEOUT
from ..core.exceptions import PersistenceError
from ..core.outcomes import NotFound
from ..sessions.model import SessionStatus


class AttendanceApiClient:
    """Trainer-side reader of ``GET /api/attendance/sessions/<token>/status``.

    Gives RosterSync the same ``session_status`` call the in-process
    SessionRegistry offers.
    """

    def __init__(
        self,
        base_url: str,
        *,
        access_token: str | None = None,
        timeout: float = DEFAULT_EVENT_SERVICE_TIMEOUT,
        http: requests.Session | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = float(timeout)
        self._http = http or requests.Session()
        self._headers = {"Authorization": f"Bearer {access_token}"} if access_token else {}

    def session_status(self, token: str) -> Union[SessionStatus, NotFound]:
        response = self._http.get(
            f"{self._base_url}/api/attendance/sessions/{token}/status",
            headers=self._headers,
            timeout=self._timeout,
        )
        if response.status_code == 404:
            return NotFound(token=token)
        if not response.ok:
            raise PersistenceError(f"Roster fetch failed ({response.status_code})")

        data = response.json()
        return SessionStatus.from_dict(data)
