"""YAML configuration loading for the codec server."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import yaml

from .codec.envelope import DEFAULT_PRODID, DEFAULT_VERSION

logger = logging.getLogger("mcp-ical-codec")

CONFIG_PATH = os.environ.get("ICAL_CODEC_CONFIG", "/config/ical_codec.yaml")

VALID_VERSIONS = {"2.0"}


@dataclass
class CodecSettings:
    """Settings applied when rendering calendars."""

    prodid: str = DEFAULT_PRODID
    version: str = DEFAULT_VERSION
    local_time: bool = False  # render DTSTART/DTEND without Z, in local time


def load_config() -> CodecSettings:
    """Load and validate ical_codec.yaml.

    Returns defaults if the file or its 'codec' section is missing.
    """
    path = CONFIG_PATH
    if not os.path.isfile(path):
        logger.warning("Config file not found: %s", path)
        return CodecSettings()

    with open(path, "r") as f:
        raw = yaml.safe_load(f)

    if not raw or "codec" not in raw:
        logger.warning("No 'codec' key in config file")
        return CodecSettings()

    entry = raw["codec"] or {}
    if not isinstance(entry, dict):
        raise ValueError("'codec' must be a mapping")

    prodid = str(entry.get("prodid", DEFAULT_PRODID)).strip()
    if not prodid:
        raise ValueError("'prodid' must not be empty")
    if "\n" in prodid:
        raise ValueError("'prodid' must be a single line")

    version = str(entry.get("version", DEFAULT_VERSION)).strip()
    if version not in VALID_VERSIONS:
        raise ValueError(f"Unsupported version '{version}'. Must be one of: {VALID_VERSIONS}")

    local_time = entry.get("local_time", False)
    if not isinstance(local_time, bool):
        raise ValueError(f"'local_time' must be true or false, got: {local_time!r}")

    return CodecSettings(prodid=prodid, version=version, local_time=local_time)
