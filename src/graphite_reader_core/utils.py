"""
Time utility functions for Graphite's epoch-second timestamps and from/until values.
"""

from datetime import datetime, timezone


ABSOLUTE_TIME_FORMAT = "%H:%M_%Y%m%d"


def epoch_to_datetime(seconds: int) -> datetime:
    """
    Convert Unix epoch seconds to a UTC datetime.

    Args:
        seconds: Unix timestamp in whole seconds.

    Returns:
        Timezone-aware datetime in UTC.
    """
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def datetime_to_epoch(dt: datetime) -> int:
    """
    Convert a datetime to Unix epoch seconds.

    Naive datetimes are interpreted as UTC.

    Args:
        dt: Datetime to convert.

    Returns:
        Timestamp in whole seconds.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp())


def minutes_ago(minutes: int) -> str:
    """
    Build a relative Graphite time N minutes in the past.

    Args:
        minutes: Number of minutes in the past.

    Returns:
        Relative time string such as "-5min".
    """
    return f"-{minutes}min"


def hours_ago(hours: int) -> str:
    """
    Build a relative Graphite time N hours in the past.

    Args:
        hours: Number of hours in the past.

    Returns:
        Relative time string such as "-2h".
    """
    return f"-{hours}h"


def days_ago(days: int) -> str:
    """
    Build a relative Graphite time N days in the past.

    Args:
        days: Number of days in the past.

    Returns:
        Relative time string such as "-7d".
    """
    return f"-{days}d"


def format_absolute(dt: datetime) -> str:
    """
    Format a datetime as an absolute Graphite time (HH:MM_YYYYMMDD).

    Aware datetimes are converted to UTC first; naive ones are taken as UTC.

    Args:
        dt: Datetime to format.

    Returns:
        Absolute time string such as "04:00_20210101".
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.strftime(ABSOLUTE_TIME_FORMAT)
