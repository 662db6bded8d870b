"""Parsing of textual setting values shared by all configurable components."""

from __future__ import annotations

_TRUE_WORDS = frozenset({"ON", "TRUE"})
_FALSE_WORDS = frozenset({"OFF", "FALSE"})


def parse_switch(value: str) -> bool:
    """Interpret an on/off style setting value."""
    word = str(value).strip().upper()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"expected ON/OFF or TRUE/FALSE, got {value!r}")


def parse_integer(
    value: str,
    minimum: int | None = None,
    maximum: int | None = None,
    context: str = "",
) -> int:
    """Parse an integer and check it against an optional inclusive range."""
    prefix = f"{context}: " if context else ""
    try:
        number = int(str(value).strip())
    except ValueError:
        raise ValueError(f"{prefix}expected a number, got {value!r}") from None
    if (minimum is not None and number < minimum) or (maximum is not None and number > maximum):
        raise ValueError(f"{prefix}value {number} out of range [{minimum}, {maximum}]")
    return number


def parse_float(value: str) -> float:
    """Parse a floating point setting value."""
    try:
        return float(str(value).strip())
    except ValueError:
        raise ValueError(f"expected a floating point number, got {value!r}") from None