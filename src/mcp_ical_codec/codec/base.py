"""Base types shared by the iCalendar codec."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

# One VEVENT block as a flat, insertion-ordered mapping of property name -> value.
PropertyRecord = dict[str, str]

BEGIN_VEVENT = "BEGIN:VEVENT"
END_VEVENT = "END:VEVENT"


class InvalidRecord(ValueError):
    """A PropertyRecord cannot be mapped to an Event."""

    def __init__(self, field_name: str, reason: str = "missing or not a string"):
        self.field_name = field_name
        super().__init__(f"Invalid iCal object: {field_name} {reason}")


@dataclass
class Event:
    """Structured calendar event.

    Unrecognized iCalendar properties travel untyped in ``extra``; their names
    are upper-cased when the event is rendered back into a PropertyRecord.
    """

    summary: str
    start: datetime
    end: datetime
    id: str | None = None  # iCalendar UID
    location: str | None = None
    description: str | None = None
    extra: dict[str, str] = field(default_factory=dict)
