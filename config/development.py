import os

from .config import DB_CONFIG, Config

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = dict(DB_CONFIG)

DEBUG = True

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")
EVENT_SERVICE_URL = Config.EVENT_SERVICE_URL
EVENT_SERVICE_TIMEOUT = Config.EVENT_SERVICE_TIMEOUT
SESSION_TOKEN_BYTES = Config.SESSION_TOKEN_BYTES
ROSTER_POLL_SECONDS = Config.ROSTER_POLL_SECONDS

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = Config.LOG_FILE

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
