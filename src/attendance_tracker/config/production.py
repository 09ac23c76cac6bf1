import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
SEED_DEMO_DATA = False

AT_RISK_THRESHOLD = int(os.getenv("AT_RISK_THRESHOLD", "3"))
CRITICAL_THRESHOLD = int(os.getenv("CRITICAL_THRESHOLD", "5"))

SUBSTITUTE_REQUIRE_ACTIVE = bool(int(os.getenv("SUBSTITUTE_REQUIRE_ACTIVE", "1")))
SUBSTITUTE_CHECK_DATE_RANGE = bool(int(os.getenv("SUBSTITUTE_CHECK_DATE_RANGE", "0")))
