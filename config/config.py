import os


class Config:
    """Values shared by every environment; environment modules override."""

    SECRET_KEY = os.environ.get("SECRET_KEY") or "change-me"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "training_attendance")

    # "mysql" or "memory"
    STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "mysql")

    # Events backend used by the join-code resolver; unset disables it.
    EVENT_SERVICE_URL = os.environ.get("EVENT_SERVICE_URL", "")
    EVENT_SERVICE_TIMEOUT = float(os.environ.get("EVENT_SERVICE_TIMEOUT", "10"))

    SESSION_TOKEN_BYTES = int(os.environ.get("SESSION_TOKEN_BYTES", "9"))
    ROSTER_POLL_SECONDS = float(os.environ.get("ROSTER_POLL_SECONDS", "3"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FILE = os.environ.get("LOG_FILE", "")


DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}
