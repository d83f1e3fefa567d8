from __future__ import annotations

import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from eventreg import config
from eventreg.db import Store, get_store

STORE_KEY = "eventreg.store"


def create_app(store: Optional[Store] = None, testing: bool = False) -> Flask:
    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))

    app = Flask(__name__)
    app.config["SECRET_KEY"] = config.SECRET_KEY
    app.config["TESTING"] = testing
    app.config["MESSAGE_TIMEOUT_MS"] = config.MESSAGE_TIMEOUT_MS
    CORS(app, origins=config.CORS_ORIGINS)

    # Storage is opened before any request is served
    if store is None:
        store = get_store()
    store.open()
    app.extensions[STORE_KEY] = store
    app.logger.info("[create_app] store ready (backend=%s)", store.backend)

    # Register blueprints
    try:
        from eventreg.api import register_api  # type: ignore
        register_api(app)
    except Exception as e:
        app.logger.warning(f"[create_app] API not registered: {e}")

    try:
        from eventreg.web import register_web  # type: ignore
        register_web(app)
    except Exception as e:
        app.logger.warning(f"[create_app] Web not registered: {e}")

    return app


def close_store(app: Flask) -> None:
    store = app.extensions.pop(STORE_KEY, None)
    if store is not None:
        store.close()
        app.logger.info("[close_store] store closed (backend=%s)", store.backend)
