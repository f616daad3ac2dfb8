from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .assignments.controller import register as register_assignments
from .container import Container, build_container
from .core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    DomainError,
    MissingStationError,
    NotFoundError,
    ValidationError,
)
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .scheduling.controller import register as register_scheduling
from .scheduling.policy import StaffingPolicy

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    AuthenticationError: 401,
    AuthorizationError: 403,
    NotFoundError: 404,
    ConflictError: 409,
    MissingStationError: 422,
    ValidationError: 422,
    ConfigurationError: 500,
}


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = next((code for cls, code in STATUS_BY_ERROR.items() if isinstance(e, cls)), 400)
        if status >= 500:
            logger.error("%s: %s", e.kind, e)
        reasons = e.reasons if isinstance(e, ValidationError) else [str(e)]
        return jsonify({"error": e.kind, "message": str(e), "reasons": list(reasons)}), status


def _init_database(db_config: dict, *, auto_init_db: bool, auto_seed_db: bool) -> None:
    database_dir = Path(__file__).resolve().parents[3] / "database"
    if auto_init_db:
        apply_schema(db_config, schema_path=database_dir / "schema.sql")
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if auto_seed_db:
        apply_seed_sql(db_config, seed_path=database_dir / "seed.sql")
        logger.info("demo seed ready")


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    With no ``container`` the MySQL-backed one is built from the active
    settings module; tests pass their own built on in-memory repositories.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        _init_database(
            db_config,
            auto_init_db=bool(getattr(settings, "AUTO_INIT_DB", False)),
            auto_seed_db=bool(getattr(settings, "AUTO_SEED_DB", False)),
        )
        container = build_container(db_config=db_config, policy=StaffingPolicy.from_settings(settings))

    _register_error_handlers(app)
    register_scheduling(app, container)
    register_assignments(app, container)

    return app
