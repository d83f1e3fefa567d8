"""
Event and registration operations.

Attendance is kept in two places: each event's ``attendees`` list and the
registrations collection. Both are checked on register/cancel and both are
written back, with no atomicity between the two saves.
"""
from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from eventreg import config
from eventreg.db import Record, Store, next_id
from eventreg.errors import NotFoundError, PersistenceError, ValidationError

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_id(value: Any) -> Optional[int]:
    """Coerce a client-supplied id ("3", 3, " 3 ") to int; None if it has no leading integer."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    m = _LEADING_INT.match(str(value))
    return int(m.group(1)) if m else None


def utc_timestamp() -> str:
    # 2025-01-01T12:00:00.000Z
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _find_event(events: List[Record], event_id: Optional[int]) -> Optional[Record]:
    if event_id is None:
        return None
    for event in events:
        if event.get("id") == event_id:
            return event
    return None


def _matches(reg: Mapping[str, Any], event_id: int, email: Any) -> bool:
    return reg.get("eventId") == event_id and reg.get("email") == email


# -----------------------------
# Events
# -----------------------------

def list_events(store: Store) -> List[Record]:
    return store.list(config.EVENTS)


def create_event(store: Store, data: Mapping[str, Any]) -> Record:
    if not all(data.get(f) for f in config.REQUIRED_EVENT_FIELDS):
        raise ValidationError("All fields are required: " + ", ".join(config.REQUIRED_EVENT_FIELDS))

    events = store.load(config.EVENTS)
    new_event = {
        "id": next_id(events),
        "title": data["title"],
        "description": data["description"],
        "date": data["date"],
        "location": data["location"],
        "attendees": [],
    }
    events.append(new_event)
    if not store.save(config.EVENTS, events):
        raise PersistenceError("Failed to save event")

    logger.info("Created event %s (%s)", new_event["id"], new_event["title"])
    return new_event


def update_event(store: Store, event_id: Any, data: Mapping[str, Any]) -> Record:
    """Overwrite only the fields given with a truthy value; empty strings are ignored."""
    eid = parse_id(event_id)
    event = store.get(config.EVENTS, eid) if eid is not None else None
    if event is None:
        raise NotFoundError("Event not found")

    for field in config.REQUIRED_EVENT_FIELDS:
        if data.get(field):
            event[field] = data[field]

    if not store.put(config.EVENTS, event):
        raise PersistenceError("Failed to update event")

    logger.info("Updated event %s", eid)
    return event


# -----------------------------
# Registrations
# -----------------------------

def list_registrations(store: Store) -> List[Record]:
    return store.list(config.REGISTRATIONS)


def register(store: Store, data: Mapping[str, Any]) -> Record:
    name = data.get("name")
    email = data.get("email")
    eid = parse_id(data.get("eventId"))

    events = store.load(config.EVENTS)
    registrations = store.load(config.REGISTRATIONS)
    event = _find_event(events, eid)
    if event is None:
        raise NotFoundError("Event not found")

    attendees = event.get("attendees") or []
    event["attendees"] = attendees

    # The two copies can drift; either one blocks a second registration
    in_event = any(att.get("email") == email for att in attendees)
    in_records = any(_matches(r, eid, email) for r in registrations)
    if in_event or in_records:
        raise ValidationError("Already registered for this event")

    registration = {
        "id": next_id(registrations),
        "eventId": eid,
        "eventTitle": event.get("title"),
        "name": name,
        "email": email,
        "registrationDate": utc_timestamp(),
    }
    attendees.append({"name": name, "email": email})
    registrations.append(registration)

    events_saved = store.save(config.EVENTS, events)
    registrations_saved = store.save(config.REGISTRATIONS, registrations)
    if not (events_saved and registrations_saved):
        logger.error("Registration %s partially saved (events=%s, registrations=%s)",
                     registration["id"], events_saved, registrations_saved)
        raise PersistenceError("Failed to complete registration")

    logger.info("Registered %s for event %s (registration %s)", email, eid, registration["id"])
    return registration


def cancel(store: Store, data: Mapping[str, Any]) -> Record:
    """Remove matching entries from both the event's attendees and registrations. Returns the event."""
    email = data.get("email")
    eid = parse_id(data.get("eventId"))

    events = store.load(config.EVENTS)
    registrations = store.load(config.REGISTRATIONS)
    event = _find_event(events, eid)
    if event is None or event.get("attendees") is None:
        raise NotFoundError("Event not found or no attendees")

    attendees = event["attendees"]
    event["attendees"] = [att for att in attendees if att.get("email") != email]
    remaining = [r for r in registrations if not _matches(r, eid, email)]

    if len(event["attendees"]) == len(attendees) and len(remaining) == len(registrations):
        raise NotFoundError("Registration not found")

    events_saved = store.save(config.EVENTS, events)
    registrations_saved = store.save(config.REGISTRATIONS, remaining)
    if not (events_saved and registrations_saved):
        logger.error("Cancellation for %s on event %s partially saved (events=%s, registrations=%s)",
                     email, eid, events_saved, registrations_saved)
        raise PersistenceError("Failed to complete cancellation")

    logger.info("Cancelled %s for event %s", email, eid)
    return event
