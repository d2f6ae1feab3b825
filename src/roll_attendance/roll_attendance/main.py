from __future__ import annotations

import atexit
import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendees.controller import register as register_attendees
from .container import build_container
from .core.exceptions import StorageError
from .database.bootstrap import load_snapshot

logger = logging.getLogger(__name__)


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = dict(getattr(settings, "DB_CONFIG"))
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = getattr(settings, "MAX_CONTENT_LENGTH", None)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    container = build_container(db_config=db_config)
    try:
        container.ledger.initialize(load_snapshot(getattr(settings, "SEED_SNAPSHOT", None)))
    except Exception:
        container.close()
        raise
    atexit.register(container.close)

    summary = container.ledger.summary()
    logger.info(
        "settings=%s store=%s roll numbers=%d marked=%d",
        settings_module, container.conn.config.describe(), summary.total, summary.marked,
    )

    @app.errorhandler(StorageError)
    def storage_error(e: StorageError):
        logger.error("Storage failure: %s", e)
        return jsonify({"success": False, "message": "Attendance store unavailable"}), 503

    app.extensions["roll_attendance"] = container
    register_attendees(app, container)

    return app
