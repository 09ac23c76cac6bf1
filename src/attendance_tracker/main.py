from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.web import register_error_handlers
from .config import get_settings_module
from .container import Container, build_container_from_settings
from .database.bootstrap import apply_schema, list_tables
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)


def create_app(*, settings: Any = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = None
    if settings is None:
        settings_module = get_settings_module()
        settings = importlib.import_module(settings_module)

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    backend = str(getattr(settings, "STORE_BACKEND", "memory")).lower()
    logger.info("[attendance-tracker] settings=%s backend=%s", settings_module or "<object>", backend)

    if container is None:
        if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            db_config = getattr(settings, "DB_CONFIG")
            apply_schema(db_config)
            logger.info("[attendance-tracker] schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container_from_settings(settings)

    app.extensions["attendance_tracker"] = container

    register_error_handlers(app)
    register_attendance(app, container)
    register_reports(app, container)

    return app
