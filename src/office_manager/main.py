from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_cors import CORS
from mysql.connector import Error as MySQLError
from werkzeug.exceptions import RequestEntityTooLarge

from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .employees.controller import register as register_employees
from .files.controller import register as register_files
from .tasks.controller import register as register_tasks
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

_SETTING_NAMES = (
    "SECRET_KEY",
    "JWT_SECRET",
    "JWT_EXP_DAYS",
    "DB_CONFIG",
    "DB_POOL_SIZE",
    "UPLOAD_FOLDER",
    "MAX_UPLOAD_BYTES",
    "BCRYPT_LOG_ROUNDS",
    "CORS_ORIGINS",
    "DEBUG",
    "TESTING",
    "LOG_LEVEL",
    "REQUIRE_AUTH",
    "AUTO_INIT_DB",
)

# Room for the multipart form fields that travel with the file.
_FORM_OVERHEAD_BYTES = 1024 * 1024


def _load_settings(settings_module: str, overrides: Optional[dict]) -> dict[str, Any]:
    settings = importlib.import_module(settings_module)
    values = {name: getattr(settings, name) for name in _SETTING_NAMES if hasattr(settings, name)}
    values.update(overrides or {})
    return values


def _cors_origins(value: str):
    value = (value or "").strip()
    if value == "*":
        return "*"
    return [o.strip() for o in value.split(",") if o.strip()]


def register_health(app: Flask, container: Container) -> None:
    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        # 200 even when MySQL is down so the process itself can be probed.
        database = "ok" if container.conn.ping() else "unavailable"
        return jsonify({"success": True, "message": "Server is running", "database": database})


def create_app(overrides: Optional[dict] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = _load_settings(settings_module, overrides)
    app.config.update(settings)
    app.secret_key = settings["SECRET_KEY"]
    app.config["MAX_CONTENT_LENGTH"] = int(settings["MAX_UPLOAD_BYTES"]) + _FORM_OVERHEAD_BYTES
    app.json.sort_keys = False

    logging.basicConfig(
        level=str(settings.get("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    db_config = settings["DB_CONFIG"]
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        container = build_container(
            db_config=db_config,
            upload_folder=settings["UPLOAD_FOLDER"],
            jwt_secret=settings.get("JWT_SECRET") or settings["SECRET_KEY"],
            pool_size=int(settings.get("DB_POOL_SIZE", 5)),
            max_upload_bytes=int(settings["MAX_UPLOAD_BYTES"]),
            bcrypt_rounds=int(settings.get("BCRYPT_LOG_ROUNDS", 10)),
            jwt_exp_days=int(settings.get("JWT_EXP_DAYS", 1)),
        )

    if settings.get("AUTO_INIT_DB"):
        target = container.conn.config
        try:
            apply_schema(target)
            logger.info("schema ready (tables=%d)", len(list_tables(target)))
        except MySQLError as e:
            # Serve anyway; /api/health reports the database as unavailable.
            logger.error("schema init skipped, database unreachable: %s", e)

    container.storage.ensure_root()

    CORS(
        app,
        origins=_cors_origins(settings.get("CORS_ORIGINS", "*")),
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    )

    @app.errorhandler(RequestEntityTooLarge)
    def too_large(_e):
        return jsonify({"success": False, "message": "File too large"}), 400

    app.extensions["office_container"] = container

    register_health(app, container)
    register_users(app, container)
    register_employees(app, container)
    register_tasks(app, container)
    register_files(app, container)

    return app
