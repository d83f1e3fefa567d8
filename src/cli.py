# src/cli.py
from __future__ import annotations

import os
import sys
import json
import argparse
import traceback
from typing import Any, Dict, List, Optional

import requests

# Ensure our package is importable regardless of CWD
sys.path.insert(0, os.path.dirname(__file__))

from eventreg import config  # noqa: E402


class ApiError(Exception):
    """Non-2xx response or network failure talking to the API."""


# ---------------------------
# HTTP client
# ---------------------------

def _base_url(base: str | None = None) -> str:
    return (base or config.API_BASE_URL).rstrip("/")


def _call(method: str, path: str, payload: Dict[str, Any] | None = None, base: str | None = None) -> Any:
    url = f"{_base_url(base)}{config.API_PREFIX}{path}"
    send = getattr(requests, method)
    try:
        if payload is None:
            r = send(url, timeout=10)
        else:
            r = send(url, json=payload, timeout=10)
    except requests.RequestException as e:
        raise ApiError(str(e)) from e

    try:
        body = r.json()
    except ValueError:
        body = None
    if r.status_code >= 400:
        message = body.get("message") if isinstance(body, dict) else None
        raise ApiError(message or f"Server error: {r.status_code}")
    return body


def _render_events(events: List[Dict[str, Any]]) -> str:
    from eventreg.web import short_date
    if not events:
        return "No upcoming events"
    lines = []
    for ev in events:
        lines.append(f"[{ev.get('id')}] {ev.get('title')}")
        lines.append(f"    Date: {short_date(ev.get('date'))}")
        lines.append(f"    Attendees: {len(ev.get('attendees') or [])}")
        if ev.get("description"):
            lines.append(f"    {ev['description']}")
    return "\n".join(lines)


# ---------------------------
# Commands
# ---------------------------

def cmd_serve(port: int, host: str, debug: bool):
    from eventreg import create_app, close_store
    app = create_app()
    try:
        app.run(host=host, port=port, debug=debug)
    finally:
        close_store(app)


def cmd_init_data():
    from eventreg.db import get_store
    store = get_store()
    store.open()
    store.close()
    print(f"{store.backend} store initialized")


def cmd_db_ping() -> None:
    from eventreg.db import get_store
    store = get_store()
    ok = store.ping()
    store.close()
    print(f"{store.backend} ping:", "ok" if ok else "failed")
    if not ok:
        raise SystemExit(2)


def cmd_events_list(as_json: bool, base: str | None = None):
    events = _call("get", "/events", base=base)
    if as_json:
        print(json.dumps(events, indent=2))
    else:
        print(_render_events(events))


def cmd_events_create(title: str, description: str, date: str, location: str, base: str | None = None):
    result = _call("post", "/events", {
        "title": title, "description": description, "date": date, "location": location,
    }, base=base)
    print(f"{result['message']} (id={result['event']['id']})")


def cmd_events_update(event_id: int, fields: Dict[str, Optional[str]], base: str | None = None):
    payload = {k: v for k, v in fields.items() if v is not None}
    result = _call("put", f"/events/{event_id}", payload, base=base)
    print(result["message"])


def cmd_register(event_id: str, name: str, email: str, base: str | None = None):
    result = _call("post", "/register", {"eventId": event_id, "name": name, "email": email}, base=base)
    print(f"{result['message']} (registration {result['registrationId']})")


def cmd_cancel(event_id: str, email: str, base: str | None = None):
    result = _call("post", "/cancel", {"eventId": event_id, "email": email}, base=base)
    print(result["message"])


def cmd_registrations(base: str | None = None):
    print(json.dumps(_call("get", "/registrations", base=base), indent=2))


# ---------------------------
# Parser / main
# ---------------------------

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Event Registration CLI")
    p.add_argument("--base-url", default=None, help=f"API base address (default: {config.API_BASE_URL})")
    sub = p.add_subparsers(dest="cmd", required=True)

    # serve
    sp = sub.add_parser("serve", help="Run Flask server")
    sp.add_argument("--port", type=int, default=config.PORT)
    sp.add_argument("--host", default=config.HOST)
    sp.add_argument("--debug", action="store_true")
    sp.set_defaults(func=lambda a: cmd_serve(a.port, a.host, a.debug))

    # storage
    si = sub.add_parser("init-data", help="Create empty storage documents if missing")
    si.set_defaults(func=lambda a: cmd_init_data())

    sc = sub.add_parser("db", help="Storage utilities")
    sc_sub = sc.add_subparsers(dest="dbcmd", required=True)
    scp = sc_sub.add_parser("ping", help="Check the configured store")
    scp.set_defaults(func=lambda a: cmd_db_ping())

    # events
    ev = sub.add_parser("events", help="List, create or update events")
    ev_sub = ev.add_subparsers(dest="evcmd", required=True)
    evl = ev_sub.add_parser("list")
    evl.add_argument("--json", action="store_true")
    evl.set_defaults(func=lambda a: cmd_events_list(a.json, a.base_url))
    evc = ev_sub.add_parser("create")
    evc.add_argument("--title", required=True)
    evc.add_argument("--description", required=True)
    evc.add_argument("--date", required=True, help="ISO-8601 date")
    evc.add_argument("--location", required=True)
    evc.set_defaults(func=lambda a: cmd_events_create(a.title, a.description, a.date, a.location, a.base_url))
    evu = ev_sub.add_parser("update")
    evu.add_argument("event_id", type=int)
    for field in config.REQUIRED_EVENT_FIELDS:
        evu.add_argument(f"--{field}", default=None)
    evu.set_defaults(func=lambda a: cmd_events_update(
        a.event_id, {f: getattr(a, f) for f in config.REQUIRED_EVENT_FIELDS}, a.base_url
    ))

    # registrations
    sr = sub.add_parser("register", help="Register for an event")
    sr.add_argument("--event-id", required=True)
    sr.add_argument("--name", required=True)
    sr.add_argument("--email", required=True)
    sr.set_defaults(func=lambda a: cmd_register(a.event_id, a.name, a.email, a.base_url))

    sx = sub.add_parser("cancel", help="Cancel a registration")
    sx.add_argument("--event-id", required=True)
    sx.add_argument("--email", required=True)
    sx.set_defaults(func=lambda a: cmd_cancel(a.event_id, a.email, a.base_url))

    sl = sub.add_parser("registrations", help="Print every registration")
    sl.set_defaults(func=lambda a: cmd_registrations(a.base_url))

    return p


def main(argv: List[str] | None = None):
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except ApiError as e:
        print("ERROR:", e)
        raise SystemExit(1)
    except Exception as e:
        # Surface trace on CLI errors
        print("ERROR:", e)
        traceback.print_exc()
        raise SystemExit(1)


if __name__ == "__main__":
    main()
