"""Ordered, caller-owned collection of schedules."""

from datetime import datetime
from typing import Iterable, Iterator, List, Optional, Tuple
import logging

from models import Schedule

logger = logging.getLogger(__name__)


class ScheduleRegistry:
    """Append-only list of schedules with linear lookup by timestamp."""

    def __init__(self, schedules: Optional[Iterable[Schedule]] = None):
        self._schedules: List[Schedule] = list(schedules or [])

    def add(self, schedule: Schedule) -> Schedule:
        self._schedules.append(schedule)
        logger.info(f"Registered schedule '{schedule}' (#{len(self._schedules)})")
        return schedule

    def __iter__(self) -> Iterator[Schedule]:
        return iter(self._schedules)

    def __len__(self) -> int:
        return len(self._schedules)

    def is_due_at(self, timestamp: datetime) -> bool:
        """Check if any schedule matches the timestamp."""
        return any(schedule.matches(timestamp) for schedule in self._schedules)

    def due_at(self, timestamp: datetime) -> List[Schedule]:
        """All schedules matching the timestamp, in registration order."""
        return [schedule for schedule in self._schedules if schedule.matches(timestamp)]

    def next_due(self, from_time: datetime,
                 max_rollovers: Optional[int] = None) -> Optional[Tuple[datetime, List[Schedule]]]:
        """Find the earliest upcoming occurrence across all schedules.

        Args:
            from_time: Reference timestamp (exclusive)
            max_rollovers: Search horizon passed to each schedule

        Returns:
            ``(timestamp, schedules due at it)`` or None if nothing is due
            within the horizon
        """
        earliest = None
        due: List[Schedule] = []
        for schedule in self._schedules:
            occurrence = schedule.next_occurrence(from_time, max_rollovers)
            if occurrence is None:
                continue
            if earliest is None or occurrence < earliest:
                earliest = occurrence
                due = [schedule]
            elif occurrence == earliest:
                due.append(schedule)

        if earliest is None:
            return None
        return earliest, due
