from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .common.web import json_error
from .container import build_container
from .payroll.controller import register as register_payroll
from .payroll.summary import SummaryGenerator
from .sessions.controller import register as register_sessions
from .signature.controller import register as register_signature
from .storage.kv import KeyValueStorage
from .users.controller import register as register_users

logger = logging.getLogger("physiotrack")


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format="[physiotrack] %(levelname)s %(name)s: %(message)s")


def create_app(
    settings_module: Optional[str] = None,
    *,
    storage: Optional[KeyValueStorage] = None,
    summary_generator: Optional[SummaryGenerator] = None,
) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    _configure_logging(str(getattr(settings, "LOG_LEVEL", "INFO")))

    storage_config = dict(getattr(settings, "STORAGE_CONFIG"))
    logger.info(
        "settings=%s storage=%s:%s key=%s",
        settings_module,
        storage_config.get("backend"),
        storage_config.get("directory"),
        storage_config.get("key"),
    )

    container = build_container(
        storage_config=storage_config,
        gemini_config=dict(getattr(settings, "GEMINI_CONFIG", {})),
        storage=storage,
        summary_generator=summary_generator,
    )
    app.extensions["physiotrack"] = container

    register_users(app, container)
    register_sessions(app, container)
    register_payroll(app, container)
    register_signature(app)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        if isinstance(e, HTTPException):
            return json_error(e.description or e.name, e.code or 500)

        logger.exception("Unhandled error")
        if app.config["DEBUG"]:
            return json_error(f"System error: {e}", 500)
        return json_error("System error", 500)

    return app
