import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "ground_ops_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# No defaults: the app refuses to start until these are set
STAFFING_RATIO = os.getenv("STAFFING_RATIO")
SKILL_MATCH_WEIGHT = os.getenv("SKILL_MATCH_WEIGHT")
CERTIFICATION_BONUS = os.getenv("CERTIFICATION_BONUS")
WORKLOAD_PENALTY = os.getenv("WORKLOAD_PENALTY")
DEFAULT_OPERATION_HOURS = os.getenv("DEFAULT_OPERATION_HOURS")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
