import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "ground_ops_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Passengers covered by one staff member, and the optimizer's scoring weights
STAFFING_RATIO = os.getenv("STAFFING_RATIO", "50")
SKILL_MATCH_WEIGHT = os.getenv("SKILL_MATCH_WEIGHT", "10")
CERTIFICATION_BONUS = os.getenv("CERTIFICATION_BONUS", "5")
WORKLOAD_PENALTY = os.getenv("WORKLOAD_PENALTY", "2")
# Window length for operations without an estimated duration
DEFAULT_OPERATION_HOURS = os.getenv("DEFAULT_OPERATION_HOURS", "2")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo stations, employees and operations on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
