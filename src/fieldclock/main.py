from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .admin.controller import register as register_admin
from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_TIMEZONE

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["DEFAULT_TIMEZONE"] = getattr(settings, "DEFAULT_TIMEZONE", DEFAULT_TIMEZONE)

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.info("settings=%s default_tz=%s", settings_module, app.config["DEFAULT_TIMEZONE"])

    if container is None:
        container = build_container(db_config=getattr(settings, "DB_CONFIG"), settings=settings)

    register_attendance(app, container)
    register_admin(app, container)

    return app
