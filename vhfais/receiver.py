"""Receiver-level settings: output tags, channel selection and screen output level."""

from __future__ import annotations

import enum

from .model import Mode
from .options import parse_integer

_TAG_BITS = {"D": 1, "T": 2, "M": 4}


class OutputLevel(enum.Enum):
    """How much of each message is printed to the screen."""

    NONE = 0
    NMEA = 1
    FULL = 2
    JSON_NMEA = 3
    JSON_SPARSE = 4
    JSON_FULL = 5


def parse_tags(text: str) -> int:
    """Turn a string of tag letters (D, T, M) into the tag mode bit mask."""
    mode = 0
    for c in text:
        bit = _TAG_BITS.get(c.upper())
        if bit is None:
            raise ValueError(f"illegal tag '{c}' defined on command line [D / T / M]")
        mode |= bit
    return mode


def resolve_channel(mode: str, nmea: str = "") -> tuple[Mode, str]:
    """Validate a channel mode and its NMEA designation, filling in defaults."""
    mode = mode.upper()
    nmea = nmea.upper()

    if mode == "AB":
        channel_mode = Mode.AB
        nmea = nmea or "AB"
    elif mode == "CD":
        channel_mode = Mode.CD
        nmea = nmea or "CD"
    elif mode == "X":
        channel_mode = Mode.X
        if not nmea:
            nmea = "XX"
        elif len(nmea) == 1:
            nmea += nmea
    else:
        raise ValueError("channel mode needs to be AB, CD or X")

    if len(nmea) != 2:
        raise ValueError(f"invalid NMEA channel designation: {nmea}")
    for c in nmea:
        if not ((c.isascii() and c.isalnum()) or c == "?"):
            raise ValueError(f"invalid NMEA channel designation: {c}")

    return channel_mode, nmea


def parse_screen_level(text: str) -> OutputLevel:
    """Parse a screen output level given as a number from 0 to 5."""
    return OutputLevel(parse_integer(text, 0, 5))