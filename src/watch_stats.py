"""
Watch history statistics: average watch rate, streaks and trend series.

All functions are pure. The reporting period drives three things at once:
the unit the average is normalized to, the streak granularity (one level
finer than the period) and the trend window with its bucket width.

    Period   average unit   streak bucket   trend window / bucket
    WEEKLY   week           day             14 days / day
    MONTHLY  month          week            6 months / week
    YEARLY   year           month           2 years / month

Weeks are ISO weeks starting on Monday, for streaks and trends alike.
"""

import logging
from dataclasses import dataclass, field, asdict
from datetime import date, timedelta
from enum import Enum
from typing import List, Optional

import numpy as np
import pandas as pd

from utils import (
    PERIOD_UNIT_DAYS, TREND_WINDOWS, STREAK_BUCKETS,
    days_between, local_date, shift_months, bucket_start, previous_bucket, bucket_label
)

logger = logging.getLogger(__name__)

_PANDAS_FREQ = {"day": "D", "week": "7D", "month": "MS"}


class Period(Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def coerce(cls, value):
        """Accept a Period or its name/value in any case."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown period: {value!r}") from None


@dataclass(frozen=True)
class TrendBucket:
    label: str
    count: int
    start: date


@dataclass
class WatchStats:
    """Aggregated watch statistics for one reporting period."""
    period: Period
    total: int
    average: float  # watched per period unit, full precision
    streak: int
    trend: List[TrendBucket] = field(default_factory=list)
    longest_streak: int = 0
    average_rating: Optional[float] = None

    def to_dict(self):
        data = asdict(self)
        data["period"] = self.period.value
        data["trend"] = [
            {"label": b.label, "count": b.count, "start": b.start.isoformat()}
            for b in self.trend
        ]
        return data


def average_watch_rate(total, elapsed_days, period):
    """
    Normalize a watch count to the period unit.

    Both the elapsed day count and the elapsed unit count are floored at 1 so
    brand-new histories do not blow up the rate.

    Args:
        total: Number of watched records
        elapsed_days: Whole days since the first watch
        period: Period

    Returns:
        Float: watched records per week, month or year
    """
    period = Period.coerce(period)
    elapsed_days = max(1, elapsed_days)
    elapsed_units = max(1.0, elapsed_days / PERIOD_UNIT_DAYS[period.value])
    return total / elapsed_units


def _count_back(present, start, kind):
    streak = 0
    cursor = start
    while cursor in present:
        streak += 1
        cursor = previous_bucket(cursor, kind)
    return streak


def current_streak(watch_days, period, today):
    """
    Consecutive buckets with at least one watch, ending at today's bucket.

    When today's bucket is still empty the count restarts from the bucket
    before it, so an unfinished day/week/month does not reset the streak.
    That second count is final even if it is also zero.

    Args:
        watch_days: Iterable of calendar dates with a watch
        period: Period
        today: Calendar date of the evaluation instant

    Returns:
        Int streak length
    """
    kind = STREAK_BUCKETS[Period.coerce(period).value]
    present = {bucket_start(d, kind) for d in watch_days}
    anchor = bucket_start(today, kind)

    streak = _count_back(present, anchor, kind)
    if streak == 0:
        streak = _count_back(present, previous_bucket(anchor, kind), kind)
    return streak


def longest_streak(watch_days, period):
    """Longest run of consecutive streak buckets anywhere in the history."""
    kind = STREAK_BUCKETS[Period.coerce(period).value]
    buckets = sorted({bucket_start(d, kind) for d in watch_days})

    best = 0
    run = 0
    previous = None
    for start in buckets:
        if previous is not None and previous_bucket(start, kind) == previous:
            run += 1
        else:
            run = 1
        best = max(best, run)
        previous = start
    return best


def trend_window(period, today):
    """
    Bucket start dates covering the trend lookback, oldest first.

    Args:
        period: Period
        today: Calendar date of the evaluation instant

    Returns:
        Tuple of (bucket kind, list of bucket start dates)
    """
    kind, size, unit = TREND_WINDOWS[Period.coerce(period).value]
    if unit == "days":
        window_start = today - timedelta(days=size)
    elif unit == "months":
        window_start = shift_months(today, -size)
    else:
        window_start = shift_months(today, -12 * size)

    first = pd.Timestamp(bucket_start(window_start, kind))
    last = pd.Timestamp(bucket_start(today, kind))
    buckets = [ts.date() for ts in pd.date_range(first, last, freq=_PANDAS_FREQ[kind])]
    return kind, buckets


def trend_series(watch_days, period, today):
    """
    Dense watch counts per bucket over the trend window.

    Args:
        watch_days: Iterable of calendar dates with a watch (one per record)
        period: Period
        today: Calendar date of the evaluation instant

    Returns:
        List of TrendBucket, one per bucket even when empty
    """
    kind, buckets = trend_window(period, today)
    keys = pd.Series([bucket_start(d, kind) for d in watch_days], dtype=object)
    counts = keys.value_counts().reindex(buckets, fill_value=0)

    return [
        TrendBucket(label=bucket_label(start, kind), count=int(count), start=start)
        for start, count in zip(buckets, counts.tolist())
    ]


def average_rating(records):
    """Mean rating of watched records, None without any."""
    ratings = [r.fun for r in records if r.date_watched is not None]
    if not ratings:
        return None
    return float(np.mean(ratings))


def compute_stats(records, period, now):
    """
    Dashboard statistics for a watch history.

    The caller passes watched records only; status is not re-checked here.
    Records without a watch date are skipped with a warning.

    Args:
        records: Iterable of watched MovieRecord
        period: Period or its name
        now: Evaluation instant

    Returns:
        WatchStats, or None when there is nothing to report
    """
    period = Period.coerce(period)
    records = list(records)
    dated = [r for r in records if r.date_watched is not None]
    if len(dated) < len(records):
        logger.warning("Skipping %d records without a watch date", len(records) - len(dated))
    if not dated:
        return None

    today = now.date()
    watch_days = [local_date(r.date_watched, now) for r in dated]
    elapsed_days = max(days_between(now, r.date_watched) for r in dated)

    stats = WatchStats(
        period=period,
        total=len(dated),
        average=average_watch_rate(len(dated), elapsed_days, period),
        streak=current_streak(watch_days, period, today),
        trend=trend_series(watch_days, period, today),
        longest_streak=longest_streak(watch_days, period),
        average_rating=average_rating(dated)
    )
    logger.debug("Computed %s stats: total=%d streak=%d buckets=%d",
                 period.value, stats.total, stats.streak, len(stats.trend))
    return stats
