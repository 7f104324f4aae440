import os

from .config import DB_CONFIG, Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = dict(DB_CONFIG)

DEBUG = False

STORAGE_BACKEND = Config.STORAGE_BACKEND
EVENT_SERVICE_URL = Config.EVENT_SERVICE_URL
EVENT_SERVICE_TIMEOUT = Config.EVENT_SERVICE_TIMEOUT
SESSION_TOKEN_BYTES = Config.SESSION_TOKEN_BYTES
ROSTER_POLL_SECONDS = Config.ROSTER_POLL_SECONDS

LOG_LEVEL = Config.LOG_LEVEL
LOG_FILE = os.getenv("LOG_FILE", "logs/attendance.log")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
