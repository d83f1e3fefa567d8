from __future__ import annotations

import logging
from datetime import datetime

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from eventreg import services
from eventreg.db import current_store
from eventreg.errors import RegistrationError

bp = Blueprint("web", __name__, template_folder="templates")

logger = logging.getLogger(__name__)


@bp.app_template_filter("short_date")
def short_date(value) -> str:
    """ISO date -> M/D/YYYY; unparseable values are shown as given."""
    try:
        d = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return str(value)
    return f"{d.month}/{d.day}/{d.year}"


@bp.get("/")
def index():
    error = None
    try:
        events = services.list_events(current_store())
    except Exception as e:
        logger.error("Failed to load events: %s", e)
        events, error = [], str(e)
    return render_template(
        "index.html",
        events=events,
        error=error,
        message_timeout_ms=current_app.config.get("MESSAGE_TIMEOUT_MS", 5000),
    )


def _submit(action, data: dict, form_name: str):
    try:
        result = action(current_store(), data)
    except RegistrationError as e:
        logger.info("%s error: %s", form_name, e.message)
        flash(e.message, f"{form_name}-error")
        return None
    return result


@bp.post("/ui/register")
def register_form():
    data = {
        "eventId": request.form.get("eventId"),
        "name": request.form.get("name"),
        "email": request.form.get("email"),
    }
    reg = _submit(services.register, data, "register")
    if reg is not None:
        flash(f"Registered for {reg['eventTitle']}", "register-success")
    return redirect(url_for("web.index"))


@bp.post("/ui/cancel")
def cancel_form():
    data = {
        "eventId": request.form.get("cancelEventId"),
        "email": request.form.get("cancelEmail"),
    }
    event = _submit(services.cancel, data, "cancel")
    if event is not None:
        flash(f"Cancelled registration for {event.get('title')}", "cancel-success")
    return redirect(url_for("web.index"))


def register_web(app):
    app.register_blueprint(bp)
