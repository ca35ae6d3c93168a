# garden/clock.py
"""Timestamp helpers. All times are timezone-aware UTC."""

from datetime import datetime, timezone

SECONDS_PER_HOUR = 3600.0


def utcnow():
    return datetime.now(timezone.utc)


def parse_timestamp(value):
    """
    Parse an ISO-8601 timestamp (string or datetime) into an aware UTC datetime.

    Rows come back from the database without an offset
    (e.g. "2025-07-04T16:40:10.603888"); those are UTC. Trailing zeros of the
    fraction are trimmed ("...10.6"), which fromisoformat accepts from 3.11 on.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def hours_between(start, end):
    """Signed hours from `start` to `end`; negative when `start` is later."""
    return (parse_timestamp(end) - parse_timestamp(start)).total_seconds() / SECONDS_PER_HOUR
