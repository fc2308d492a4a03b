"""Field expressions, schedules and their persisted records."""

from .field import (
    FieldExpression, AnyValue, Single, Range, ValueList, Stepped,
    as_expression, any_value, on, between, one_of, every, stepped
)
from .validation import (
    InvalidFieldValue, FieldKind, FieldBounds, FIELD_BOUNDS, verify, verify_for,
    verify_for_minute, verify_for_hour, verify_for_day_of_month,
    verify_for_month, verify_for_day_of_week
)
from .ordinals import Month, Weekday, ordinal_for
from .schedule import Schedule
from .record import Base, ScheduleRecord

__all__ = [
    "FieldExpression",
    "AnyValue",
    "Single",
    "Range",
    "ValueList",
    "Stepped",
    "as_expression",
    "any_value",
    "on",
    "between",
    "one_of",
    "every",
    "stepped",
    "InvalidFieldValue",
    "FieldKind",
    "FieldBounds",
    "FIELD_BOUNDS",
    "verify",
    "verify_for",
    "verify_for_minute",
    "verify_for_hour",
    "verify_for_day_of_month",
    "verify_for_month",
    "verify_for_day_of_week",
    "Month",
    "Weekday",
    "ordinal_for",
    "Schedule",
    "Base",
    "ScheduleRecord"
]
