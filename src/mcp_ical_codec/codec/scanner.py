"""Line scanner that cuts VEVENT blocks out of calendar text."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .base import BEGIN_VEVENT, END_VEVENT

logger = logging.getLogger("mcp-ical-codec")


def iter_blocks(text: str, flush_unterminated: bool = True) -> Iterator[list[str]]:
    """Yield the lines of each VEVENT block in ``text``.

    Each yielded list starts with the ``BEGIN:VEVENT`` line and never contains
    the closing ``END:VEVENT`` line. Malformed input is recovered, not rejected:

    - a ``BEGIN:VEVENT`` while a block is open flushes the open block as-is;
    - a block still open at end of input is flushed as-is, or dropped when
      ``flush_unterminated`` is False;
    - lines outside any block (VCALENDAR wrapper, other components) are dropped.
    """
    block: list[str] | None = None

    for line in text.split("\n"):
        if line.startswith(BEGIN_VEVENT):
            if block is not None:
                logger.debug("Nested BEGIN:VEVENT, flushing open block (%d lines)", len(block))
                yield block
            block = [line]
        elif line.startswith(END_VEVENT):
            if block is not None:
                yield block
                block = None
        elif block is not None:
            block.append(line)

    if block is not None:
        if not flush_unterminated:
            logger.debug("Dropping unterminated VEVENT at end of input (%d lines)", len(block))
            return
        logger.debug("Unterminated VEVENT at end of input, flushing (%d lines)", len(block))
        yield block


def extract_blocks(text: str) -> str:
    """Return the VEVENT blocks of ``text`` joined with newlines, END markers stripped."""
    return "\n".join("\n".join(block) for block in iter_blocks(text))


def ical_to_webdav(ical_data: str, base_url: str = "") -> str:
    """Stripped form of ``ical_data`` as handed to the WebDAV layer.

    ``base_url`` is accepted for call-site compatibility and not used.
    """
    return extract_blocks(ical_data)


def webdav_to_ical(webdav_data: str) -> str:
    """Stripped form of WebDAV ``calendar-data`` text."""
    return extract_blocks(webdav_data)
