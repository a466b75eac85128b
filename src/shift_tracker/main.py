from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import register_error_handlers
from .container import Container, build_container
from .core.logging_config import setup_logging
from .database.bootstrap import apply_schema, list_tables
from .notifications.controller import register as register_notifications
from .shifts.controller import register as register_shifts

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        store = str(getattr(settings, "SHIFT_STORE", "mysql")).lower()
        db_config = getattr(settings, "DB_CONFIG", {})
        logger.info("settings=%s store=%s", settings_module, store)

        if store == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info(
                "Schema ready on %s@%s:%s/%s (tables=%d)",
                db_config.get("user"),
                db_config.get("host"),
                db_config.get("port", 3306),
                db_config.get("database"),
                len(list_tables(db_config)),
            )

        container = build_container(settings=settings)

    register_error_handlers(app)
    register_shifts(app, container)
    register_notifications(app, container)

    @app.route("/", endpoint="index")
    def index():
        return "Employee Shift Tracker API is running..."

    return app
