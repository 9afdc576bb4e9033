"""
Conversion between ``datetime.date`` and the ``YYYYMMDD`` integer form.

Registration and payment dates are persisted (and returned to API
clients) as eight-digit integers such as ``20240315``.  Inside the
application they are plain ``date`` objects; these two functions are
the only place where the integer encoding is produced or parsed.
"""

from datetime import date
from typing import Optional


def encode_date(value: date) -> int:
    """Return ``value`` encoded as a ``YYYYMMDD`` integer."""
    return value.year * 10000 + value.month * 100 + value.day


def decode_date(value: Optional[int]) -> Optional[date]:
    """Parse a ``YYYYMMDD`` integer.  ``None`` passes through unchanged.

    Raises ``ValueError`` for integers that are not a valid calendar
    date in that form (e.g. ``2024131`` or ``20240230``).
    """
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Expected an integer date, got {value!r}")
    if not 10000101 <= value <= 99991231:
        raise ValueError(f"{value} is not an eight-digit YYYYMMDD date")
    year, rest = divmod(value, 10000)
    month, day = divmod(rest, 100)
    return date(year, month, day)
