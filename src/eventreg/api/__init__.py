from __future__ import annotations

import importlib
from flask import Blueprint, jsonify, request

from eventreg import config
from eventreg.errors import RegistrationError

API_MODULES = [
    "health",
    "events",
    "registrations",
]


def json_body() -> dict:
    # Missing or malformed bodies read as {}
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def handle_registration_error(err: RegistrationError):
    return jsonify(err.to_dict()), err.status


def register_api(app):
    api_bp = Blueprint("api", __name__, url_prefix=config.API_PREFIX or None)
    api_bp.register_error_handler(RegistrationError, handle_registration_error)

    for name in API_MODULES:
        mod_qualname = f"{__name__}.{name}"
        try:
            mod = importlib.import_module(mod_qualname)
        except Exception as e:
            app.logger.warning("Skipping API module %s: %s", mod_qualname, e)
            continue

        bp = getattr(mod, "bp", None)
        if bp is None:
            app.logger.warning("Module %s has no `bp`; skipping", mod_qualname)
            continue
        api_bp.register_blueprint(bp)

    app.register_blueprint(api_bp)
