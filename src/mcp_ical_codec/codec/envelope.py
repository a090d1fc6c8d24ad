"""VCALENDAR envelope around serialized VEVENTs, as sent in a CalDAV PUT body."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import replace

from .base import Event
from .mapping import event_to_record
from .records import serialize_records

DEFAULT_PRODID = "-//mcp-ical-codec//EN"
DEFAULT_VERSION = "2.0"


def wrap_calendar(body: str, prodid: str = DEFAULT_PRODID, version: str = DEFAULT_VERSION) -> str:
    """Wrap serialized VEVENT text in a BEGIN/END:VCALENDAR envelope."""
    lines = ["BEGIN:VCALENDAR", f"VERSION:{version}", f"PRODID:{prodid}"]
    if body:
        lines.append(body)
    lines.append("END:VCALENDAR")
    return "\n".join(lines)


def new_event_id() -> str:
    return str(uuid.uuid4())


def event_resource_name(event_id: str) -> str:
    """Name of the calendar collection member holding the event."""
    if not event_id:
        raise ValueError("Event ID (UID) is required")
    return f"{event_id}.ics"


def ensure_event_id(event: Event) -> Event:
    """Return ``event`` with a UID, generating one if it has none."""
    if event.id:
        return event
    return replace(event, id=new_event_id(), extra=dict(event.extra))


def events_to_calendar(
    events: Iterable[Event],
    prodid: str = DEFAULT_PRODID,
    version: str = DEFAULT_VERSION,
    local: bool = False,
) -> str:
    """Map, serialize and wrap ``events`` into a full VCALENDAR document."""
    records = [event_to_record(event, local=local) for event in events]
    return wrap_calendar(serialize_records(records), prodid=prodid, version=version)
