from __future__ import annotations
from datetime import datetime, timezone
from flask import Blueprint, jsonify

from eventreg import config
from eventreg.db import current_store

bp = Blueprint("api_health", __name__)


@bp.get("/health")
def health():
    store = current_store()
    now = datetime.now(timezone.utc).isoformat()

    return jsonify({
        "ok": True,
        "status": "ok",
        "time_utc": now,
        "env": {
            "flask_env": config.FLASK_ENV,
            "cors_origins": config.CORS_ORIGINS,
        },
        "store": {
            "backend": store.backend,
            "ping": store.ping(),
        },
    })
