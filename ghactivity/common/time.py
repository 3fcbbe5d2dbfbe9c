"""Timestamp parsing shared by the windowing and sorting stages."""

from __future__ import annotations

import datetime as dt


def parse_timestamp(value: str | None) -> dt.datetime | None:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Naive values are treated as UTC, matching how the GitHub APIs report
    times. Returns ``None`` for missing or unparsable input.

    Examples
    --------
    >>> parse_timestamp("2024-01-15T10:00:00Z")
    datetime.datetime(2024, 1, 15, 10, 0, tzinfo=datetime.timezone.utc)
    >>> parse_timestamp("not a date") is None
    True

    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip().replace("Z", "+00:00")
    try:
        parsed = dt.datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


def start_of_day(day: dt.date) -> dt.datetime:
    """Return midnight UTC at the start of ``day``."""
    return dt.datetime(day.year, day.month, day.day, tzinfo=dt.UTC)
