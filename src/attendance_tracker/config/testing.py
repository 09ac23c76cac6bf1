SECRET_KEY = "test-secret"

STORE_BACKEND = "memory"

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "attendance_tracker_test",
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
SEED_DEMO_DATA = True

AT_RISK_THRESHOLD = 3
CRITICAL_THRESHOLD = 5

SUBSTITUTE_REQUIRE_ACTIVE = True
SUBSTITUTE_CHECK_DATE_RANGE = False
