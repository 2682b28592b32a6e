"""Date codec for date-valued fields.

Dates travel as ten ASCII digits laid out ``hhmmDDMMYY`` (hour, minute,
day, month, two-digit year). Seconds are not transmitted.
"""

from __future__ import annotations

from datetime import datetime

# strftime equivalent of the wire layout hhmmDDMMYY
_STRFTIME_LAYOUT = "%H%M%d%m%y"


def format_date(value: datetime) -> str:
    """Render a datetime as a ``hhmmDDMMYY`` field."""
    return value.strftime(_STRFTIME_LAYOUT)


def parse_date(text: str) -> datetime:
    """Parse a ``hhmmDDMMYY`` field.

    Raises:
        ValueError: If ``text`` is not ten digits forming a valid date.
    """
    if len(text) != 10 or not text.isdigit():
        raise ValueError(f"Expected 10 digits (hhmmDDMMYY), got {text!r}")
    return datetime.strptime(text, _STRFTIME_LAYOUT)
