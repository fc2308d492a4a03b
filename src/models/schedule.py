"""Schedule: five validated field expressions and an opaque action."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterator, Optional

from .field import AnyValue, FieldExpression, as_expression
from .validation import FieldKind, verify_for


@dataclass(frozen=True)
class Schedule:
    """An immutable cron schedule.

    Construction validates every field against its domain, so a Schedule
    that exists is always valid. The ``action`` is stored for the caller
    and never interpreted here.
    """
    minute: FieldExpression = field(default_factory=AnyValue)
    hour: FieldExpression = field(default_factory=AnyValue)
    day_of_month: FieldExpression = field(default_factory=AnyValue)
    month: FieldExpression = field(default_factory=AnyValue)
    day_of_week: FieldExpression = field(default_factory=AnyValue)
    action: Any = field(default=None, compare=False)

    def __post_init__(self):
        for kind, expression in self.fields():
            verify_for(kind, expression)

    @classmethod
    def build(cls, minute: Any = None, hour: Any = None, day_of_month: Any = None,
              month: Any = None, day_of_week: Any = None, action: Any = None) -> "Schedule":
        """Build a schedule from expressions or plain values.

        Each field accepts a FieldExpression, an int, a list of values or
        None (any value). Validation is all-or-nothing.

        Raises:
            InvalidFieldValue: if any field violates its domain bounds
        """
        return cls(
            minute=as_expression(minute),
            hour=as_expression(hour),
            day_of_month=as_expression(day_of_month),
            month=as_expression(month),
            day_of_week=as_expression(day_of_week),
            action=action,
        )

    def fields(self):
        return (
            (FieldKind.MINUTE, self.minute),
            (FieldKind.HOUR, self.hour),
            (FieldKind.DAY_OF_MONTH, self.day_of_month),
            (FieldKind.MONTH, self.month),
            (FieldKind.DAY_OF_WEEK, self.day_of_week),
        )

    def matches(self, timestamp: datetime) -> bool:
        """Check whether all five fields accept the timestamp's minute.

        Day-of-month and day-of-week are combined with AND. Weekdays use
        ``datetime.weekday()`` numbering (Monday is 0).
        """
        return (
            self.minute.matches(timestamp.minute)
            and self.hour.matches(timestamp.hour)
            and self.day_of_month.matches(timestamp.day)
            and self.month.matches(timestamp.month)
            and self.day_of_week.matches(timestamp.weekday())
        )

    def next_occurrence(self, from_time: datetime,
                        max_rollovers: Optional[int] = None) -> Optional[datetime]:
        """Next matching minute strictly after ``from_time``, or None."""
        from scheduler.occurrence import next_occurrence
        return next_occurrence(self, from_time, max_rollovers)

    def occurrences(self, from_time: datetime, count: int,
                    max_rollovers: Optional[int] = None) -> Iterator[datetime]:
        """Yield up to ``count`` successive occurrences after ``from_time``."""
        current = from_time
        for _ in range(count):
            current = self.next_occurrence(current, max_rollovers)
            if current is None:
                return
            yield current

    def __str__(self) -> str:
        return " ".join(str(expression) for _, expression in self.fields())
