"""Conversion between VEVENT text and flat property records."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .base import BEGIN_VEVENT, END_VEVENT, PropertyRecord
from .scanner import iter_blocks

logger = logging.getLogger("mcp-ical-codec")


def _parse_property(line: str) -> tuple[str, str] | None:
    """Split ``KEY:value`` at the first colon. None if key or value is empty."""
    key, _, value = line.partition(":")
    key = key.strip()
    value = value.strip()
    if not key or not value:
        return None
    return key, value


def parse_records(text: str) -> list[PropertyRecord]:
    """Parse every VEVENT block of ``text`` into a PropertyRecord.

    Lines without a colon, or with an empty key or value, are skipped.
    Duplicate keys in one block keep the last value. A block with no
    END:VEVENT before end of input is dropped.
    """
    records: list[PropertyRecord] = []
    for block in iter_blocks(text, flush_unterminated=False):
        record: PropertyRecord = {}
        for line in block[1:]:
            prop = _parse_property(line)
            if prop is None:
                logger.debug("Skipping malformed property line: %r", line)
                continue
            key, value = prop
            record[key] = value
        records.append(record)
    return records


def serialize_records(records: Iterable[PropertyRecord]) -> str:
    """Render records as VEVENT blocks. Values are written verbatim."""
    lines: list[str] = []
    for record in records:
        lines.append(BEGIN_VEVENT)
        for key, value in record.items():
            if key and value:
                lines.append(f"{key}:{value}")
        lines.append(END_VEVENT)
    return "\n".join(lines)


# Names used by the WebDAV side of the client; same codec.
parse_webdav = parse_records
webdav_to_string = serialize_records
