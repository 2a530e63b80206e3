import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_checkin"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "please-set-ADMIN_PASSWORD")

REMOTE_ENDPOINT = os.getenv("REMOTE_ENDPOINT", "")
REMOTE_TIMEOUT_SECONDS = float(os.getenv("REMOTE_TIMEOUT_SECONDS", "15"))
SYNC_INTERVAL_SECONDS = int(os.getenv("SYNC_INTERVAL_SECONDS", "30"))

OFFICE_LOCATION = (
    float(os.getenv("OFFICE_LAT", "17.345854")),
    float(os.getenv("OFFICE_LNG", "102.834789")),
)
MAX_DISTANCE_METERS = float(os.getenv("MAX_DISTANCE_METERS", "20"))
POSITION_PAUSE_SECONDS = float(os.getenv("POSITION_PAUSE_SECONDS", "0.8"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
