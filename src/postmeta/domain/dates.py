"""Publication date parsing and formatting.

The only accepted shape is ``YYYY-MM-DD`` with a four-digit year and
zero-padded two-digit month and day.

INVARIANT: ``parse_date(format_date(d)) == d`` for every valid date.
"""

from __future__ import annotations

import re
from datetime import date

from postmeta.domain.errors import InvalidDateError

_DATE_PATTERN = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)


def parse_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a :class:`~datetime.date`.

    Raises:
        InvalidDateError: If *value* has any other shape (``2024-1-5``,
            ``20240105``, surrounding whitespace) or names a date that does
            not exist (``2024-13-01``, ``2023-02-29``).

    Examples:
        >>> parse_date("2024-01-05")
        datetime.date(2024, 1, 5)
    """
    match = _DATE_PATTERN.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        msg = f"Date {value!r} is not in the format YYYY-MM-DD"
        raise InvalidDateError(msg, value=value)

    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as exc:
        msg = f"Date {value!r} is not a valid calendar date"
        raise InvalidDateError(msg, value=value) from exc


def format_date(value: date) -> str:
    """Format *value* as ``YYYY-MM-DD``."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def today() -> date:
    """Today's local calendar date."""
    return date.today()
