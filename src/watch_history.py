"""
History and calendar views over watched records.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import List

from utils import start_of_week, shift_months, local_date, seconds_between
from movie_records import watched_records

logger = logging.getLogger(__name__)


class HistorySort(Enum):
    DATE_DESC = "DATE_DESC"
    DATE_ASC = "DATE_ASC"
    RATING_DESC = "RATING_DESC"
    RATING_ASC = "RATING_ASC"


@dataclass
class CalendarDay:
    day: date
    in_month: bool
    records: List = field(default_factory=list)


def watch_day(record, now=None):
    """Calendar date of a watch as seen from the zone of ``now``."""
    return local_date(record.date_watched, now)


def filter_history(records, year=None, month=None, now=None):
    """
    Watched records, optionally narrowed to a watch year and/or month.

    Args:
        records: Iterable of MovieRecord
        year: Int year or None for all years
        month: Int month 1-12 or None for all months
        now: Evaluation instant whose zone decides the watch day

    Returns:
        List of MovieRecord in input order
    """
    history = watched_records(records)
    if year is not None:
        history = [r for r in history if watch_day(r, now).year == int(year)]
    if month is not None:
        history = [r for r in history if watch_day(r, now).month == int(month)]
    return history


def sort_history(records, option=HistorySort.DATE_DESC, now=None):
    """
    Sort watched records by watch date or rating.

    Watch dates are compared as offsets from ``now``; without it the first
    record's watch date is the reference.
    """
    option = HistorySort(option)
    history = list(records)
    if not history:
        return history
    if option in (HistorySort.DATE_DESC, HistorySort.DATE_ASC):
        reference = now or history[0].date_watched
        history.sort(key=lambda r: seconds_between(r.date_watched, reference),
                     reverse=option is HistorySort.DATE_DESC)
    else:
        history.sort(key=lambda r: r.fun, reverse=option is HistorySort.RATING_DESC)
    return history


def history_years(records, now=None):
    """Distinct watch years, newest first."""
    return sorted({watch_day(r, now).year for r in watched_records(records)}, reverse=True)


def watched_on(records, day, now=None):
    """Watched records whose watch date falls on ``day``."""
    return [r for r in watched_records(records) if watch_day(r, now) == day]


def calendar_month(records, year, month, now=None):
    """
    Month grid for the watch calendar.

    Weeks start on Monday. Leading and trailing days from the neighbouring
    months pad the grid to whole weeks. Watches land on the calendar day seen
    from the zone of ``now``, matching the statistics trend.

    Args:
        records: Iterable of MovieRecord
        year: Int year
        month: Int month 1-12
        now: Evaluation instant, optional

    Returns:
        List of weeks, each a list of seven CalendarDay
    """
    first = date(year, month, 1)
    last = shift_months(first, 1) - timedelta(days=1)
    grid_start = start_of_week(first)
    grid_end = start_of_week(last) + timedelta(days=6)

    by_day = {}
    for r in watched_records(records):
        by_day.setdefault(watch_day(r, now), []).append(r)

    weeks = []
    cursor = grid_start
    while cursor <= grid_end:
        week = []
        for _ in range(7):
            week.append(CalendarDay(day=cursor, in_month=cursor.month == month,
                                    records=by_day.get(cursor, [])))
            cursor += timedelta(days=1)
        weeks.append(week)

    logger.debug("Built calendar for %d-%02d with %d weeks", year, month, len(weeks))
    return weeks
