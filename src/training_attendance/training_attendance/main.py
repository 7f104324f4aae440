from __future__ import annotations

import importlib
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.responses import error_response
from .container import build_container
from .core.exceptions import DomainError, PersistenceError, ValidationError
from .database.bootstrap import apply_schema
from .joining.event_client import EventJoinClient
from .sessions.controller import register as register_sessions

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"

_SETTING_KEYS = (
    "SECRET_KEY",
    "DEBUG",
    "TESTING",
    "DB_CONFIG",
    "STORAGE_BACKEND",
    "AUTO_INIT_DB",
    "EVENT_SERVICE_URL",
    "EVENT_SERVICE_TIMEOUT",
    "SESSION_TOKEN_BYTES",
    "ROSTER_POLL_SECONDS",
    "LOG_LEVEL",
    "LOG_FILE",
)


def setup_logging(app: Flask) -> None:
    """Configure the package logger from LOG_LEVEL / LOG_FILE."""
    level = getattr(logging, str(app.config.get("LOG_LEVEL") or "INFO").upper(), logging.INFO)
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    package_logger = logging.getLogger(__package__)
    package_logger.setLevel(level)

    if not package_logger.handlers:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        package_logger.addHandler(stream_handler)

    log_file = app.config.get("LOG_FILE")
    if log_file and not app.testing:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]")
        )
        file_handler.setLevel(level)
        package_logger.addHandler(file_handler)

    app.logger.setLevel(level)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def handle_validation(error: ValidationError):
        return error_response(str(error), 400)

    @app.errorhandler(PersistenceError)
    def handle_persistence(error: PersistenceError):
        app.logger.error("Persistence failure: %s", error)
        return error_response("Attendance storage is unavailable, please try again", 503)

    @app.errorhandler(DomainError)
    def handle_domain(error: DomainError):
        return error_response(str(error), 400)

    @app.errorhandler(HTTPException)
    def handle_http(error: HTTPException):
        return error_response(error.description or error.name, error.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        app.logger.exception("Unhandled error")
        return error_response("Internal server error", 500)


def create_app(
    settings_module: Optional[str] = None,
    *,
    overrides: Optional[dict] = None,
    event_client: Optional[EventJoinClient] = None,
) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    for key in _SETTING_KEYS:
        if hasattr(settings, key):
            app.config[key] = getattr(settings, key)
    app.config.update(overrides or {})

    setup_logging(app)
    app.logger.info("Training attendance starting (settings=%s, storage=%s)", settings_module, app.config.get("STORAGE_BACKEND"))

    backend = str(app.config.get("STORAGE_BACKEND", "mysql")).lower()
    if backend == "mysql" and app.config.get("AUTO_INIT_DB"):
        apply_schema(app.config["DB_CONFIG"], schema_path=SCHEMA_PATH)

    container = build_container(
        storage_backend=backend,
        db_config=app.config.get("DB_CONFIG"),
        event_service_url=app.config.get("EVENT_SERVICE_URL") or None,
        event_service_timeout=float(app.config.get("EVENT_SERVICE_TIMEOUT", 10)),
        token_bytes=int(app.config.get("SESSION_TOKEN_BYTES", 9)),
        event_client=event_client,
    )
    app.extensions["attendance_container"] = container

    register_sessions(app, container)
    register_attendance(app, container)
    register_error_handlers(app)

    @app.route("/health")
    def health_check():
        return jsonify({"status": "healthy", "service": "training-attendance", "storage": backend})

    return app
