import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_checkin_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

ADMIN_PASSWORD = "test-admin"

REMOTE_ENDPOINT = ""
REMOTE_TIMEOUT_SECONDS = 1.0
SYNC_INTERVAL_SECONDS = 30

OFFICE_LOCATION = (17.345854, 102.834789)
MAX_DISTANCE_METERS = 20.0
POSITION_PAUSE_SECONDS = 0.0

AUTO_INIT_DB = False
AUTO_SEED_DB = False
