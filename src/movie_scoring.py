"""
Watch-worthiness scoring and ordering of the to-watch queue.
"""

import logging
from datetime import MINYEAR, MAXYEAR, datetime
from enum import Enum

import numpy as np

from utils import (
    SCORE_WEIGHTS, ADDED_DECAY, RELEASE_DECAY_DAYS, NEUTRAL_RELEASE_SCORE,
    clamp01, days_between, seconds_between
)
from movie_records import queued_records

logger = logging.getLogger(__name__)


class SortOption(Enum):
    RANKED = "RANKED"
    RECENTLY_ADDED = "RECENTLY_ADDED"
    HIGHEST_PRIORITY = "HIGHEST_PRIORITY"


def release_score(release_year, now):
    """
    Recency-of-release bonus.

    Decays linearly from 1 at the start of the release year to 0 ten years
    later. Records without a year get the neutral score.

    Args:
        release_year: Int or None
        now: Evaluation instant

    Returns:
        Float between 0 and 1
    """
    if not release_year:
        return NEUTRAL_RELEASE_SCORE
    if not MINYEAR <= release_year <= MAXYEAR:
        return 0.0 if release_year < MINYEAR else 1.0
    release_start = datetime(release_year, 1, 1, tzinfo=now.tzinfo)
    days_since_release = days_between(now, release_start)
    return 1.0 - clamp01(days_since_release / RELEASE_DECAY_DAYS)


def added_score(days_since_added):
    """
    U-shaped queue-age score.

    Fresh additions start high, the score dips through the middle of an
    item's queue life and rises again as it turns into backlog. Negative
    ages (added in the future) are used as-is.

    Args:
        days_since_added: Whole days since the record was queued

    Returns:
        Float: 0.55 at day 0, approaching 0.45 for very old entries
    """
    fresh = np.exp(-days_since_added / ADDED_DECAY["fresh_days"])
    stale = 1.0 - np.exp(-days_since_added / ADDED_DECAY["stale_days"])
    return float(ADDED_DECAY["fresh_weight"] * fresh + ADDED_DECAY["stale_weight"] * stale)


def rescale_rating(value):
    """Map a 1-5 slider value onto 0-1."""
    return (value - 1) / 4


def score_breakdown(record, now, weights=None):
    """
    Compute the sub-scores behind a record's rank.

    Args:
        record: MovieRecord
        now: Evaluation instant
        weights: Optional partial override of SCORE_WEIGHTS

    Returns:
        Dictionary with release, added, priority, fun and final score
    """
    weights = {**SCORE_WEIGHTS, **(weights or {})}
    parts = {
        "release": release_score(record.release_year, now),
        "added": added_score(days_between(now, record.date_added)),
        "priority": rescale_rating(record.priority),
        "fun": rescale_rating(record.fun)
    }
    parts["score"] = (
        weights["release"] * parts["release"] +
        weights["added"] * parts["added"] +
        weights["priority"] * parts["priority"] +
        weights["fun"] * parts["fun"]
    )
    return parts


def score(record, now, weights=None):
    """
    Rank key for the to-watch queue; higher surfaces sooner.

    Args:
        record: MovieRecord
        now: Evaluation instant
        weights: Optional override of SCORE_WEIGHTS

    Returns:
        Float score
    """
    return score_breakdown(record, now, weights)["score"]


def sort_queue(records, option, now):
    """
    Order queued records for display.

    Records that are not queued are dropped. Ranked ties go to the most
    recently added record; other ties keep their input order.

    Args:
        records: Iterable of MovieRecord
        option: SortOption or its name
        now: Evaluation instant

    Returns:
        List of MovieRecord
    """
    option = SortOption(option)
    queue = queued_records(records)

    if option is SortOption.RANKED:
        # equal scores fall back to newest first
        scores = {id(r): score(r, now) for r in queue}
        ages = {id(r): seconds_between(now, r.date_added) for r in queue}
        queue.sort(key=lambda r: (scores[id(r)], -ages[id(r)]), reverse=True)
    elif option is SortOption.RECENTLY_ADDED:
        queue.sort(key=lambda r: seconds_between(now, r.date_added))
    else:
        queue.sort(key=lambda r: r.priority, reverse=True)

    logger.debug("Sorted %d queued records by %s", len(queue), option.value)
    return queue
