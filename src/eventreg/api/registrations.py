from __future__ import annotations
from flask import Blueprint, jsonify

from eventreg import services
from eventreg.api import json_body
from eventreg.db import current_store

bp = Blueprint("api_registrations", __name__)


@bp.post("/register")
def register():
    """
    POST /register {eventId, name, email}
    """
    reg = services.register(current_store(), json_body())
    return jsonify({
        "success": True,
        "message": f"Registered for {reg['eventTitle']}",
        "registrationId": reg["id"],
    })


@bp.post("/cancel")
def cancel():
    """
    POST /cancel {eventId, email}
    Removes the attendee and the registration record; 404 if neither matched.
    """
    event = services.cancel(current_store(), json_body())
    return jsonify({
        "success": True,
        "message": f"Cancelled registration for {event.get('title')}",
    })


@bp.get("/registrations")
def list_registrations():
    # Admin view: every registration, unfiltered
    return jsonify(services.list_registrations(current_store()))
