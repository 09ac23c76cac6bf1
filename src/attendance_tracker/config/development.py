import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# "memory" keeps everything in-process (seeded with demo data); "mysql" uses DB_CONFIG.
STORE_BACKEND = os.getenv("STORE_BACKEND", "memory")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
SEED_DEMO_DATA = bool(int(os.getenv("SEED_DEMO_DATA", "1")))

AT_RISK_THRESHOLD = int(os.getenv("AT_RISK_THRESHOLD", "3"))
CRITICAL_THRESHOLD = int(os.getenv("CRITICAL_THRESHOLD", "5"))

# Substitute access: honour the assignment's isActive flag and/or its date range.
SUBSTITUTE_REQUIRE_ACTIVE = bool(int(os.getenv("SUBSTITUTE_REQUIRE_ACTIVE", "1")))
SUBSTITUTE_CHECK_DATE_RANGE = bool(int(os.getenv("SUBSTITUTE_CHECK_DATE_RANGE", "0")))
