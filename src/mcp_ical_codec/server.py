#!/usr/bin/env python3
"""
mcp-ical-codec: iCalendar VEVENT codec exposed as an MCP server.

Parses calendar text (as found in CalDAV calendar-data) into property records
and events, and renders events back into VCALENDAR documents for PUT bodies.

Environment variables:
    ICAL_CODEC_CONFIG: Path to ical_codec.yaml (default: /config/ical_codec.yaml)
"""

import logging
import sys
from datetime import datetime
from typing import Any

from mcp.server.fastmcp import FastMCP

from .codec.base import Event, InvalidRecord
from .codec.envelope import ensure_event_id, events_to_calendar
from .codec.mapping import record_to_event
from .codec.records import parse_records, serialize_records
from .codec.scanner import extract_blocks
from .config import CodecSettings, load_config

# MCP stdio servers must NEVER write to stdout; log to stderr only.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("mcp-ical-codec")


# ---------------------------------------------------------------------------
# Module-level state
# ---------------------------------------------------------------------------

_settings: CodecSettings = CodecSettings()


def _event_to_dict(event: Event) -> dict[str, Any]:
    """Convert Event to JSON-friendly dict."""
    return {
        "id": event.id,
        "summary": event.summary,
        "start": event.start.isoformat(),
        "end": event.end.isoformat(),
        "location": event.location,
        "description": event.description,
        "extra": dict(event.extra),
    }


def _parse_datetime(value: str) -> datetime:
    """Parse ISO 8601 datetime string. Supports date-only and datetime."""
    from dateutil.parser import parse as parse_dt
    return parse_dt(value)


# ---------------------------------------------------------------------------
# MCP Server + Tools
# ---------------------------------------------------------------------------

mcp = FastMCP("ical-codec")


@mcp.tool()
async def strip_calendar(calendar_data: str) -> dict:
    """Cut the VEVENT blocks out of calendar text.

    Returns the blocks joined with newlines, END:VEVENT markers removed.

    Args:
        calendar_data: Raw iCalendar text (e.g. a CalDAV calendar-data payload)
    """
    return {"data": extract_blocks(calendar_data)}


@mcp.tool()
async def parse_calendar(calendar_data: str) -> dict:
    """Parse every VEVENT into a flat property record.

    Args:
        calendar_data: Raw iCalendar text
    """
    records = parse_records(calendar_data)
    return {"count": len(records), "records": records}


@mcp.tool()
async def extract_events(calendar_data: str) -> dict:
    """Parse every VEVENT into an event.

    Records missing UID, SUMMARY, DTSTART or DTEND, or with dates that do not
    decode, are reported in "errors"; the other events are still returned.

    Args:
        calendar_data: Raw iCalendar text
    """
    events: list[Event] = []
    errors: list[str] = []

    for index, record in enumerate(parse_records(calendar_data)):
        try:
            events.append(record_to_event(record))
        except InvalidRecord as e:
            logger.warning("Skipping VEVENT #%d: %s", index, e)
            errors.append(f"VEVENT #{index}: {e}")

    result: dict[str, Any] = {
        "count": len(events),
        "events": [_event_to_dict(e) for e in events],
    }
    if errors:
        result["errors"] = errors
    return result


@mcp.tool()
async def render_event(
    summary: str,
    start: str,
    end: str,
    event_id: str = "",
    location: str = "",
    description: str = "",
    extra: dict[str, str] | None = None,
) -> dict:
    """Render one event as a VCALENDAR document ready for a CalDAV PUT.

    A UID is generated when event_id is empty.

    Args:
        summary: Event title/summary
        start: Start date/time (ISO 8601, e.g. "2026-02-14T14:00:00Z")
        end: End date/time (ISO 8601)
        event_id: Event UID (optional)
        location: Event location (optional)
        description: Event description (optional)
        extra: Additional iCalendar properties, e.g. {"status": "CONFIRMED"} (optional)
    """
    try:
        dt_start = _parse_datetime(start)
    except Exception:
        return {"error": f"Invalid start date: {start}"}
    try:
        dt_end = _parse_datetime(end)
    except Exception:
        return {"error": f"Invalid end date: {end}"}

    event = ensure_event_id(Event(
        id=event_id or None,
        summary=summary,
        start=dt_start,
        end=dt_end,
        location=location or None,
        description=description or None,
        extra=dict(extra or {}),
    ))
    calendar = events_to_calendar(
        [event],
        prodid=_settings.prodid,
        version=_settings.version,
        local=_settings.local_time,
    )
    return {"id": event.id, "calendar": calendar}


@mcp.tool()
async def render_records(records: list[dict[str, str]]) -> dict:
    """Render property records as VEVENT text (no VCALENDAR envelope).

    Args:
        records: List of {"PROPERTY": "value"} mappings, one per VEVENT
    """
    return {"data": serialize_records(records)}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main():
    """Entry point for console script and python -m."""
    global _settings

    _settings = load_config()
    logger.info("Codec settings: prodid=%s version=%s local_time=%s",
                _settings.prodid, _settings.version, _settings.local_time)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
