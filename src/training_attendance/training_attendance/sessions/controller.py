from __future__ import annotations

from flask import Flask, request

from ..common.responses import error_response, rejection_response, success_response
from ..container import Container
from ..core.outcomes import AlreadyEnded, NotFound


def register(app: Flask, container: Container) -> None:
    registry = container.session_registry

    @app.route("/api/attendance/sessions", methods=["POST"], endpoint="create_session")
    def create_session():
        data = request.get_json(silent=True) or {}
        session = registry.create_session(
            data.get("training_id"),
            data.get("mode", "gps"),
            data.get("radius_m"),
            data.get("location"),
            trainer_id=data.get("trainer_id"),
            hotspot_ssid=data.get("hotspot_ssid"),
            trainer_device=data.get("trainer_device"),
            trainer_ip=data.get("trainer_ip") or request.remote_addr,
        )
        return success_response(201, session=session.to_dict())

    @app.route("/api/attendance/sessions/<token>/status", methods=["GET"], endpoint="session_status")
    def session_status(token: str):
        status = registry.session_status(token)
        if isinstance(status, NotFound):
            return rejection_response(status.reason, "Attendance session not found")
        return success_response(**status.to_dict())

    @app.route("/api/attendance/sessions/<token>/attendance", methods=["GET"], endpoint="session_attendance")
    def session_attendance(token: str):
        if registry.get_session(token) is None:
            return error_response("Attendance session not found", 404, reason="NOT_FOUND")
        records = registry.list_attendance(token)
        return success_response(records=[r.to_dict() for r in records], count=len(records))

    @app.route("/api/attendance/sessions/<token>/end", methods=["PUT"], endpoint="end_session")
    def end_session(token: str):
        result = registry.end_session(token)
        if isinstance(result, NotFound):
            return rejection_response(result.reason, "Attendance session not found")
        if isinstance(result, AlreadyEnded):
            return rejection_response(
                result.reason,
                "Attendance session already ended",
                session=result.session.to_dict(),
            )
        return success_response(session=result.to_dict(), count=registry.attendee_count(token))

    @app.route("/api/attendance/trainer/<trainer_id>/active", methods=["GET"], endpoint="trainer_active_sessions")
    def trainer_active_sessions(trainer_id: str):
        sessions = registry.list_active_sessions(trainer_id)
        return success_response(sessions=[s.to_dict() for s in sessions])

    @app.route("/api/attendance/training/<training_id>/sessions", methods=["GET"], endpoint="training_sessions")
    def training_sessions(training_id: str):
        sessions = registry.list_training_sessions(training_id)
        return success_response(sessions=[s.to_dict() for s in sessions])
