from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .attendance.model import AttendanceRecord
from .container import Container, build_container
from .core.exceptions import ConflictError, NotFoundError, ValidationError
from .customers.controller import register as register_customers
from .database.bootstrap import apply_schema, list_tables
from .database.seed import seed_demo_data
from .deliveries.controller import register as register_deliveries
from .members.controller import register as register_members
from .messages.controller import register as register_messages
from .prices.controller import register as register_prices
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)


def _conflict_body(e: ConflictError) -> dict:
    body = {"message": str(e)}
    if e.existing is not None:
        # the attendance screens read the stored sheet from "attendance"
        key = "attendance" if isinstance(e.existing, AttendanceRecord) else "existing"
        body[key] = e.existing.to_dict()
    return body


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def handle_validation(e: ValidationError):
        return jsonify({"message": str(e)}), 400

    @app.errorhandler(NotFoundError)
    def handle_not_found(e: NotFoundError):
        return jsonify({"message": str(e)}), 404

    @app.errorhandler(ConflictError)
    def handle_conflict(e: ConflictError):
        return jsonify(_conflict_body(e)), 409

    @app.errorhandler(HTTPException)
    def handle_http(e: HTTPException):
        return jsonify({"message": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error")
        return jsonify({"message": str(e) or e.__class__.__name__}), 500


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["CORS_ORIGIN"] = getattr(settings, "CORS_ORIGIN", "")

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        backend = getattr(settings, "STORAGE_BACKEND", "mysql")
        db_config = getattr(settings, "DB_CONFIG", None)

        if backend == "mysql":
            logger.info(
                "settings=%s db=%s@%s:%s/%s",
                settings_module,
                db_config.get("user"),
                db_config.get("host"),
                db_config.get("port", 3306),
                db_config.get("database"),
            )
            if getattr(settings, "AUTO_INIT_DB", False):
                apply_schema(db_config)
                logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        else:
            logger.info("settings=%s backend=%s (data is not persisted)", settings_module, backend)

        container = build_container(
            backend=backend,
            db_config=db_config,
            default_milk_price=float(getattr(settings, "DEFAULT_MILK_PRICE", 58)),
            message_failure_rate=float(getattr(settings, "MESSAGE_FAILURE_RATE", 0)),
        )
        if getattr(settings, "AUTO_SEED_DB", False):
            seed_demo_data(container)

    app.extensions["container"] = container

    if app.config["CORS_ORIGIN"]:
        CORS(app, origins=app.config["CORS_ORIGIN"])

    @app.route("/", endpoint="index")
    def index():
        return "Milk Management API is running"

    register_error_handlers(app)

    register_customers(app, container)
    register_members(app, container)
    register_prices(app, container)
    register_deliveries(app, container)
    register_attendance(app, container)
    register_reports(app, container)
    register_messages(app, container)

    return app
