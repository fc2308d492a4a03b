"""Next-occurrence search over (year, month, day, hour, minute)."""

import calendar
from datetime import datetime
from typing import Optional, TYPE_CHECKING
import logging

from config import settings

if TYPE_CHECKING:
    from models.schedule import Schedule

logger = logging.getLogger(__name__)


def next_occurrence(schedule: "Schedule", from_time: datetime,
                    max_rollovers: Optional[int] = None) -> Optional[datetime]:
    """Find the first minute strictly after ``from_time`` that the schedule accepts.

    The search walks the calendar from the most significant field down,
    carrying into the next higher field whenever a field has no match left
    in its range and resetting every lower field to its domain minimum.

    Args:
        schedule: Schedule to evaluate
        from_time: Reference timestamp; its tzinfo is kept but never converted
        max_rollovers: Number of year rollovers allowed before giving up
            (default: ``settings.max_year_rollovers``)

    Returns:
        The next occurrence with seconds zeroed, or None when the horizon
        is exhausted
    """
    if max_rollovers is None:
        max_rollovers = settings.max_year_rollovers

    year = from_time.year
    month = from_time.month
    day = from_time.day
    hour = from_time.hour
    minute = from_time.minute
    rollovers = 0

    while True:
        found_month = schedule.month.next_value(month, 12)
        if found_month is None:
            rollovers += 1
            if rollovers > max_rollovers:
                logger.debug(f"No occurrence of '{schedule}' within {max_rollovers} "
                             f"year rollovers after {from_time.isoformat()}")
                return None
            first_month = schedule.month.min_value()
            if first_month is None:
                return None
            year += 1
            month = max(first_month, 1)
            day, hour, minute = 1, 0, 0
            continue
        if found_month != month:
            month = found_month
            day, hour, minute = 1, 0, 0

        days_in_month = calendar.monthrange(year, month)[1]
        found_day = None
        for candidate in range(day, days_in_month + 1):
            weekday = calendar.weekday(year, month, candidate)
            if schedule.day_of_month.matches(candidate) and schedule.day_of_week.matches(weekday):
                found_day = candidate
                break
        if found_day is None:
            month += 1
            day, hour, minute = 1, 0, 0
            continue
        if found_day != day:
            day = found_day
            hour, minute = 0, 0

        found_hour = schedule.hour.next_value(hour, 23)
        if found_hour is None:
            day += 1
            hour, minute = 0, 0
            continue
        if found_hour != hour:
            hour = found_hour
            minute = 0

        found_minute = schedule.minute.next_value(minute, 59)
        if found_minute is None:
            hour += 1
            minute = 0
            continue
        minute = found_minute

        try:
            candidate_time = datetime(year, month, day, hour, minute, tzinfo=from_time.tzinfo)
        except ValueError:
            candidate_time = None
        if candidate_time is not None and candidate_time > from_time:
            return candidate_time
        minute += 1
