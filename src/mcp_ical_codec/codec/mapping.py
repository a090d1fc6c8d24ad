"""Mapping between PropertyRecords and Events."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .base import BEGIN_VEVENT, Event, InvalidRecord, PropertyRecord
from .datetimes import format_ical_datetime, parse_ical_datetime
from .records import parse_records

logger = logging.getLogger("mcp-ical-codec")

REQUIRED_PROPERTIES = ("UID", "SUMMARY", "DTSTART", "DTEND")
OPTIONAL_PROPERTIES = ("LOCATION", "DESCRIPTION")
MAPPED_PROPERTIES = REQUIRED_PROPERTIES + OPTIONAL_PROPERTIES


def record_to_event(record: dict[str, Any]) -> Event:
    """Build an Event from a parsed record.

    Raises InvalidRecord if UID, SUMMARY, DTSTART or DTEND is missing or not a
    string, if DTSTART or DTEND does not decode to a date-time, or if
    LOCATION / DESCRIPTION is present but not a string.
    """
    for key in REQUIRED_PROPERTIES:
        if not isinstance(record.get(key), str):
            raise InvalidRecord(key)
    for key in OPTIONAL_PROPERTIES:
        if key in record and not isinstance(record[key], str):
            raise InvalidRecord(key, "is not a string")

    start = parse_ical_datetime(record["DTSTART"])
    if start is None:
        raise InvalidRecord("DTSTART", "is not a valid date-time")
    end = parse_ical_datetime(record["DTEND"])
    if end is None:
        raise InvalidRecord("DTEND", "is not a valid date-time")

    event = Event(
        id=record["UID"],
        summary=record["SUMMARY"],
        start=start,
        end=end,
    )
    if record.get("LOCATION"):
        event.location = record["LOCATION"]
    if record.get("DESCRIPTION"):
        event.description = record["DESCRIPTION"]

    event.extra = {k: v for k, v in record.items() if k not in MAPPED_PROPERTIES}
    return event


def event_to_record(event: Event, local: bool = False) -> PropertyRecord:
    """Render an Event as a record. Custom field names are upper-cased."""
    record: PropertyRecord = {}
    if event.id:
        record["UID"] = event.id
    record["SUMMARY"] = event.summary
    record["DTSTART"] = format_ical_datetime(event.start, local=local)
    record["DTEND"] = format_ical_datetime(event.end, local=local)
    if event.location:
        record["LOCATION"] = event.location
    if event.description:
        record["DESCRIPTION"] = event.description

    for key, value in event.extra.items():
        record[key.upper()] = value
    return record


def events_from_text(text: str) -> list[Event]:
    """Parse calendar text straight into Events. Stops at the first invalid record."""
    return [record_to_event(record) for record in parse_records(text)]


def events_from_calendar_data(chunks: Iterable[str]) -> list[Event]:
    """Collect Events from several ``calendar-data`` payloads of a REPORT response.

    Payloads without any VEVENT are skipped.
    """
    events: list[Event] = []
    for chunk in chunks:
        if BEGIN_VEVENT not in chunk:
            continue
        events.extend(events_from_text(chunk))
    logger.debug("Collected %d event(s) from calendar data", len(events))
    return events


map_ical_object_to_event = record_to_event
map_event_to_ical_object = event_to_record
