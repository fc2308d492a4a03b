"""APScheduler trigger backed by a Schedule."""

from datetime import datetime, timedelta
from typing import Optional

from apscheduler.triggers.base import BaseTrigger
from apscheduler.util import astimezone

from models import Schedule


class ScheduleTrigger(BaseTrigger):
    """Fires at every minute the schedule accepts.

    Times are evaluated as wall-clock times in ``timezone``; the
    occurrence search itself never converts between zones.
    """

    def __init__(self, schedule: Schedule, timezone=None, max_rollovers: Optional[int] = None):
        self.schedule = schedule
        self.timezone = astimezone(timezone) if timezone is not None else None
        self.max_rollovers = max_rollovers

    def get_next_fire_time(self, previous_fire_time: Optional[datetime],
                           now: datetime) -> Optional[datetime]:
        tz = self.timezone or now.tzinfo
        if previous_fire_time is not None:
            start = previous_fire_time
        else:
            # A minute that is due exactly now should still fire
            start = now - timedelta(microseconds=1)

        if start.tzinfo is not None and tz is not None:
            start = start.astimezone(tz)
        wall_clock = start.replace(tzinfo=None)

        next_time = self.schedule.next_occurrence(wall_clock, self.max_rollovers)
        if next_time is None or tz is None:
            return next_time
        if hasattr(tz, "localize"):
            return tz.localize(next_time)
        return next_time.replace(tzinfo=tz)

    def __getstate__(self):
        return {
            "version": 1,
            "schedule": self.schedule,
            "timezone": self.timezone,
            "max_rollovers": self.max_rollovers,
        }

    def __setstate__(self, state):
        self.schedule = state["schedule"]
        self.timezone = state["timezone"]
        self.max_rollovers = state["max_rollovers"]

    def __str__(self):
        return f"schedule[{self.schedule}]"

    def __repr__(self):
        return f"<{self.__class__.__name__} ({self.schedule}, timezone='{self.timezone}')>"
