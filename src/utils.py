"""
Utility functions and constants for the watchlist analytics core.
"""

import math
from datetime import datetime, timedelta

import pandas as pd

# Global configuration constants
SCORE_WEIGHTS = {
    "release": 0.35,
    "added": 0.30,
    "priority": 0.20,
    "fun": 0.15
}

ADDED_DECAY = {
    "fresh_weight": 0.55,
    "fresh_days": 7.0,
    "stale_weight": 0.45,
    "stale_days": 60.0
}

RELEASE_DECAY_DAYS = 3650.0
NEUTRAL_RELEASE_SCORE = 0.5

# Days per reporting unit when normalizing the average watch rate
PERIOD_UNIT_DAYS = {
    "weekly": 7.0,
    "monthly": 30.44,
    "yearly": 365.25
}

# Trend lookback per period: (bucket kind, window size, window unit)
TREND_WINDOWS = {
    "weekly": ("day", 14, "days"),
    "monthly": ("week", 6, "months"),
    "yearly": ("month", 2, "years")
}

# Streak granularity sits one level below the reporting period
STREAK_BUCKETS = {
    "weekly": "day",
    "monthly": "week",
    "yearly": "month"
}

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

SECONDS_PER_DAY = 86400.0


def clamp01(x):
    """Clamp a value into [0, 1]."""
    return max(0.0, min(1.0, x))


def days_between(later, earlier):
    """
    Whole days elapsed from ``earlier`` to ``later``.

    The difference is truncated toward zero, so it is negative when
    ``earlier`` lies after ``later``.

    Args:
        later: datetime
        earlier: datetime

    Returns:
        Int: number of whole days
    """
    return math.trunc(seconds_between(later, earlier) / SECONDS_PER_DAY)


def seconds_between(later, earlier):
    """Signed seconds from ``earlier`` to ``later`` after aligning their zones."""
    later, earlier = align_timestamps(later, earlier)
    return (later - earlier).total_seconds()


def align_timestamps(reference, other):
    """
    Make two datetimes comparable.

    Aware values are converted to the reference zone. A naive value next to an
    aware one is read as wall time in the other's zone.
    """
    if reference.tzinfo is not None and other.tzinfo is not None:
        return reference, other.astimezone(reference.tzinfo)
    if reference.tzinfo is not None:
        return reference, other.replace(tzinfo=reference.tzinfo)
    if other.tzinfo is not None:
        return reference.replace(tzinfo=other.tzinfo), other
    return reference, other


def local_date(value, now=None):
    """
    Calendar date of ``value`` as seen from the zone of ``now``.

    Without ``now``, or when either side is naive, the value's own date is used.
    """
    if isinstance(value, datetime):
        if now is not None and value.tzinfo is not None and now.tzinfo is not None:
            value = value.astimezone(now.tzinfo)
        return value.date()
    return value


def start_of_week(day):
    """Monday of the ISO week containing ``day``."""
    return day - timedelta(days=day.weekday())


def start_of_month(day):
    return day.replace(day=1)


def shift_months(day, months):
    """
    Move a date by whole calendar months, clamping the day of month.

    Args:
        day: date
        months: Signed number of months

    Returns:
        date
    """
    return (pd.Timestamp(day) + pd.DateOffset(months=months)).date()


def bucket_start(day, kind):
    """Start date of the day/week/month bucket containing ``day``."""
    if kind == "day":
        return day
    if kind == "week":
        return start_of_week(day)
    if kind == "month":
        return start_of_month(day)
    raise ValueError(f"Unknown bucket kind: {kind}")


def previous_bucket(start, kind):
    """Start date of the bucket immediately before the one starting at ``start``."""
    if kind == "day":
        return start - timedelta(days=1)
    if kind == "week":
        return start - timedelta(days=7)
    if kind == "month":
        return start_of_month(start - timedelta(days=1))
    raise ValueError(f"Unknown bucket kind: {kind}")


def bucket_label(start, kind):
    """
    Chart label for a bucket.

    Days read "Jan 5", weeks "W3" (ISO week number) and months "Jan 24".
    """
    if kind == "day":
        return f"{MONTH_ABBR[start.month - 1]} {start.day}"
    if kind == "week":
        return f"W{start.isocalendar()[1]}"
    if kind == "month":
        return f"{MONTH_ABBR[start.month - 1]} {start.year % 100:02d}"
    raise ValueError(f"Unknown bucket kind: {kind}")
