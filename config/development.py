import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "guard_attendance"),
}

# All "today" lookups resolve in this zone
BUSINESS_TIMEZONE = os.getenv("BUSINESS_TIMEZONE", "Asia/Seoul")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
