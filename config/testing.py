from .config import DB_CONFIG

SECRET_KEY = "test-secret"

DB_CONFIG = dict(DB_CONFIG)

DEBUG = False
TESTING = True

STORAGE_BACKEND = "memory"
EVENT_SERVICE_URL = ""
EVENT_SERVICE_TIMEOUT = 1.0
SESSION_TOKEN_BYTES = 9
ROSTER_POLL_SECONDS = 0.05

LOG_LEVEL = "WARNING"
LOG_FILE = ""

AUTO_INIT_DB = False
