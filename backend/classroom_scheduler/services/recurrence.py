# backend/classroom_scheduler/services/recurrence.py
"""
Weekly recurrence expansion.

Weekday numbering is Sunday-based: 0=Sunday, 1=Monday, ... 6=Saturday.
"""

from datetime import date, timedelta
from typing import Iterable, Iterator, List

from ..schemas.schedule import RecurrencePattern

SUNDAY = 0
SATURDAY = 6


def weekday_index(value: date) -> int:
    """Sunday-based weekday index of ``value``."""
    return value.isoweekday() % 7


def iter_occurrences(start_date: date, end_date: date, days_of_week: Iterable[int]) -> Iterator[date]:
    """Yield every date in ``[start_date, end_date]`` whose weekday is selected, in order."""
    wanted = frozenset(days_of_week)
    if not wanted or end_date < start_date:
        return

    current = start_date
    one_day = timedelta(days=1)
    while current <= end_date:
        if weekday_index(current) in wanted:
            yield current
        current += one_day


def expand_recurrence(pattern: RecurrencePattern) -> List[date]:
    """All dates selected by ``pattern``, ascending."""
    return list(iter_occurrences(pattern.start_date, pattern.end_date, pattern.days_of_week))


def count_occurrences(start_date: date, end_date: date, days_of_week: Iterable[int]) -> int:
    """
    Number of dates ``iter_occurrences`` would yield, without walking the range.

    Full weeks contribute one occurrence per selected weekday; the leftover
    days are checked individually.
    """
    wanted = frozenset(day for day in days_of_week if SUNDAY <= day <= SATURDAY)
    if not wanted or end_date < start_date:
        return 0

    total_days = (end_date - start_date).days + 1
    full_weeks, remainder = divmod(total_days, 7)
    count = full_weeks * len(wanted)

    first_weekday = weekday_index(start_date)
    for offset in range(remainder):
        if (first_weekday + offset) % 7 in wanted:
            count += 1

    return count
