"""Shared value parsing utilities for external API responses.

Plaid's SDK returns ``date`` objects, enum wrapper objects and floats,
while test doubles and raw JSON bodies hand over plain strings. These
helpers normalise both shapes.
"""

from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation


def parse_date(value) -> date | None:
    """Parse a ``YYYY-MM-DD`` string (or date/datetime object) to a date.

    Args:
        value: A string, date, datetime, or None.

    Returns:
        A ``date``, or None if the value cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except (ValueError, TypeError):
        return None


def as_utc(value: datetime | None) -> datetime | None:
    """Return ``value`` as a timezone-aware UTC datetime.

    SQLite drops tzinfo on round-trip, so naive values read back from the
    database are assumed to be UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_decimal(value) -> Decimal | None:
    """Convert a value to Decimal, returning None on failure."""
    if value is None:
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def enum_value(value) -> str | None:
    """Unwrap a Plaid SDK enum model (``AccountType("depository")``) to its string."""
    if value is None:
        return None
    return str(getattr(value, "value", value))
