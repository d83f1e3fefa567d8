from __future__ import annotations
from flask import Blueprint, jsonify

from eventreg import services
from eventreg.api import json_body
from eventreg.db import current_store

bp = Blueprint("api_events", __name__)


@bp.get("/events")
def list_events():
    """
    GET /events
    Every event as stored, attendees included.
    """
    return jsonify(services.list_events(current_store()))


@bp.post("/events")
def create_event():
    """
    POST /events {title, description, date, location}
    All four fields are required.
    """
    event = services.create_event(current_store(), json_body())
    return jsonify({"success": True, "message": "Event created", "event": event})


@bp.put("/events/<event_id>")
def update_event(event_id: str):
    """
    PUT /events/<id> {title?, description?, date?, location?}
    Only non-empty fields overwrite; registrations keep the title they were made under.
    """
    event = services.update_event(current_store(), event_id, json_body())
    return jsonify({"success": True, "message": "Event updated", "event": event})
