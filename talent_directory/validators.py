"""
Field validators for imported CSV values.

Each ``is_*`` predicate is pure and returns a bool. The ``parse_*`` helpers
convert an already-validated string into its Python value.
"""

import re
from collections.abc import Iterable
from datetime import date, datetime

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")

TRUTHY_VALUES = {"true", "1"}


def is_valid_email(value: str) -> bool:
    """Check for the ``local@domain.tld`` shape"""
    if not value:
        return False
    return EMAIL_PATTERN.match(value.strip()) is not None


def is_valid_date(value: str) -> bool:
    """Check that the string is an ISO date or datetime on a real calendar day"""
    try:
        parse_datetime(value)
    except ValueError:
        return False
    return True


def is_integer(value: str) -> bool:
    """Check that the string is a finite whole number"""
    if value is None:
        return False
    return INTEGER_PATTERN.match(value.strip()) is not None


def matches_enum(value: str, allowed: Iterable[str]) -> bool:
    """Case-insensitive membership test against a fixed allowed set"""
    if value is None:
        return False
    candidate = value.strip().lower()
    return any(candidate == str(option).lower() for option in allowed)


def is_truthy(value: str | None) -> bool:
    """Interpret a CSV flag such as ``is_public``"""
    if value is None:
        return False
    return value.strip().lower() in TRUTHY_VALUES


def parse_datetime(value: str) -> datetime:
    """
    Parse an ISO-ish date or datetime string.

    Accepts ``2025-01-15``, ``2025-01-15 10:00:00`` and ``2025-01-15T10:00:00Z``.

    Raises:
        ValueError: If the value is blank or not a valid calendar date
    """
    if value is None or not value.strip():
        raise ValueError("empty date")

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    return datetime.fromisoformat(text)


def parse_date(value: str) -> date:
    """Parse a date string, dropping any time component"""
    return parse_datetime(value).date()
