"""Datetime utilities shared by the recruitment services."""

from datetime import datetime, timezone


def now() -> datetime:
    """Get current datetime in UTC."""
    return datetime.now(timezone.utc)


def to_unix_millis(dt: datetime) -> int:
    """
    Convert datetime to milliseconds since the epoch.

    Args:
        dt: Datetime to convert

    Returns:
        Unix timestamp in milliseconds
    """
    return int(dt.timestamp() * 1000)


def format_interview_time(dt: datetime) -> str:
    """
    Format an interview date for display in candidate e-mails.

    Args:
        dt: Interview datetime

    Returns:
        Display string, e.g. "Tuesday, 20 October 2026 at 10:30 UTC"
    """
    tz_name = dt.tzname() or "local time"
    return f"{dt.strftime('%A, %d %B %Y at %H:%M')} {tz_name}"
