from __future__ import annotations

from flask import Flask, request

from ..common.responses import error_response, rejection_response, success_response
from ..common.validators import optional_str, parse_location, require_non_empty
from ..container import Container
from ..core.outcomes import AlreadyJoined, Attended, Failed, JoinedEvent, Rejected
from ..joining.model import Trainee


def _bearer_token() -> str | None:
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip() or None
    return None


def _device_meta(data: dict) -> dict:
    meta = data.get("device_meta") or {}
    return meta if isinstance(meta, dict) else {"raw": str(meta)}


def register(app: Flask, container: Container) -> None:
    registry = container.session_registry
    gate = container.admission_gate
    resolver = container.code_resolver

    @app.route("/api/attendance/sessions/<token>/mark", methods=["POST"], endpoint="mark_attendance")
    def mark_attendance(token: str):
        data = request.get_json(silent=True) or {}
        trainee_id = require_non_empty(data.get("trainee_id") or data.get("user_id"), "trainee_id")

        session = registry.get_session(token)
        if session is None:
            return error_response("Attendance session not found", 404, reason="NOT_FOUND")

        result = gate.admit(
            session,
            trainee_id,
            data.get("method"),
            parse_location(data.get("location")),
            _device_meta(data),
            trainee_name=optional_str(data.get("user_name")),
            trainee_phone=optional_str(data.get("user_phone")),
        )
        if isinstance(result, Rejected):
            return rejection_response(result.reason, result.detail)
        return success_response(record=result.to_dict())

    @app.route("/api/attendance/join", methods=["POST"], endpoint="join_by_code")
    def join_by_code():
        data = request.get_json(silent=True) or {}
        trainee = Trainee(
            trainee_id=require_non_empty(data.get("trainee_id") or data.get("user_id"), "trainee_id"),
            name=optional_str(data.get("user_name")),
            phone=optional_str(data.get("user_phone")),
            access_token=_bearer_token(),
        )

        outcome = resolver.resolve(
            optional_str(data.get("code")),
            trainee,
            location=parse_location(data.get("location")),
            device_meta=_device_meta(data),
        )

        if isinstance(outcome, JoinedEvent):
            return success_response(outcome="joined_event", event=dict(outcome.event))
        if isinstance(outcome, AlreadyJoined):
            return success_response(outcome="already_joined", event=dict(outcome.event))
        if isinstance(outcome, Attended):
            return success_response(outcome="attended", record=outcome.record.to_dict())

        if isinstance(outcome, Failed):
            return rejection_response(
                outcome.reason,
                outcome.detail,
                mechanism=outcome.mechanism.value if outcome.mechanism else None,
            )
        raise TypeError(f"Unexpected join outcome: {outcome!r}")
