from __future__ import annotations

import logging
from typing import Protocol

import requests

from ..core.constants import DEFAULT_EVENT_SERVICE_TIMEOUT
from .model import EventJoinResult, Trainee

logger = logging.getLogger(__name__)


class EventJoinClient(Protocol):
    def join_event_by_code(self, code: str, trainee: Trainee) -> EventJoinResult:
        raise NotImplementedError


class HttpEventJoinClient(EventJoinClient):
    """Joins events through the events backend: ``POST <base>/events/join/code``.

    One request per call. Transport errors and non-2xx answers become failure
    results; retrying is left to whoever calls the resolver again.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_EVENT_SERVICE_TIMEOUT,
        http: requests.Session | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = float(timeout)
        self._http = http or requests.Session()

    def join_event_by_code(self, code: str, trainee: Trainee) -> EventJoinResult:
        headers = {"Content-Type": "application/json"}
        if trainee.access_token:
            headers["Authorization"] = f"Bearer {trainee.access_token}"

        try:
            response = self._http.post(
                f"{self._base_url}/events/join/code",
                json={"code": code},
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Event join request failed: %s", exc)
            return EventJoinResult.failure(str(exc))

        data = self._json(response)
        event = data.get("event") or {}

        if response.status_code == 409:
            return EventJoinResult.rejoined(event)
        if response.ok:
            if data.get("alreadyJoined") or data.get("already_joined"):
                return EventJoinResult.rejoined(event)
            return EventJoinResult.joined(event)

        return EventJoinResult.failure(data.get("message") or f"Event join failed ({response.status_code})")

    @staticmethod
    def _json(response: requests.Response) -> dict:
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}
