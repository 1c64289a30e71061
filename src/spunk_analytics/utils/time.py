# src/spunk_analytics/utils/time.py
"""UTC calendar helpers used to bucket counters."""

from datetime import UTC, datetime, timedelta


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def day_bucket(now: datetime) -> str:
    """Return the ISO calendar date of ``now`` in UTC."""
    return now.astimezone(UTC).date().isoformat()


def week_start(now: datetime) -> str:
    """Return the ISO date of the UTC Monday starting the week of ``now``.

    Sundays belong to the week that began on the preceding Monday.
    """
    today = now.astimezone(UTC).date()
    return (today - timedelta(days=today.weekday())).isoformat()


def trailing_days(now: datetime, count: int) -> list[str]:
    """Return ``count`` day buckets ending with today, most recent first."""
    today = now.astimezone(UTC).date()
    return [(today - timedelta(days=offset)).isoformat() for offset in range(count)]


def isoformat_z(now: datetime) -> str:
    """Format ``now`` as ISO-8601 UTC with milliseconds and a ``Z`` suffix."""
    stamp = now.astimezone(UTC).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def hour_of_day(now: datetime) -> int:
    """Return the UTC hour (0-23) of ``now``."""
    return now.astimezone(UTC).hour
