import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "ground_ops_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STAFFING_RATIO = 50
SKILL_MATCH_WEIGHT = 10
CERTIFICATION_BONUS = 5
WORKLOAD_PENALTY = 2
DEFAULT_OPERATION_HOURS = 2

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
