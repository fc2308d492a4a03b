"""Cron expression parsing, validation and description."""

from datetime import datetime
from typing import Any, Optional, Union
import logging

from models import (
    AnyValue, FieldExpression, FieldKind, Month, Range, Schedule,
    Single, Stepped, ValueList, Weekday, ordinal_for, verify_for,
)

logger = logging.getLogger(__name__)

FIELD_ORDER = (
    FieldKind.MINUTE,
    FieldKind.HOUR,
    FieldKind.DAY_OF_MONTH,
    FieldKind.MONTH,
    FieldKind.DAY_OF_WEEK,
)


class CronSyntaxError(ValueError):
    """Raised when a cron expression is not well formed."""

    def __init__(self, message: str, expression: str = ""):
        self.expression = expression
        super().__init__(message)


def _parse_atom(text: str, kind: FieldKind, source: str) -> FieldExpression:
    if text == "*":
        return AnyValue()
    if "-" in text:
        low, _, high = text.partition("-")
        if not low or not high or "-" in high:
            raise CronSyntaxError(f"Malformed range '{text}' in {kind.value} field", source)
        return Range(ordinal_for(kind, low), ordinal_for(kind, high))
    return Single(ordinal_for(kind, text))


def _parse_part(text: str, kind: FieldKind, source: str) -> FieldExpression:
    if not text:
        raise CronSyntaxError(f"Empty value in {kind.value} field", source)
    if "/" not in text:
        return _parse_atom(text, kind, source)

    base_text, _, step_text = text.partition("/")
    if not base_text or not step_text.isdigit():
        raise CronSyntaxError(f"Malformed step '{text}' in {kind.value} field", source)
    return Stepped(_parse_atom(base_text, kind, source), int(step_text))


def parse_field(text: str, kind: FieldKind) -> FieldExpression:
    """Parse and validate one field (e.g. ``"*/15"``, ``"mon-fri"``, ``"1,15"``).

    Args:
        text: Field text
        kind: Which field the text belongs to

    Returns:
        Validated field expression

    Raises:
        CronSyntaxError: if the text is malformed
        InvalidFieldValue: if a value is out of the field's bounds
    """
    text = text.strip()
    parts = text.split(",")
    if len(parts) == 1:
        expression = _parse_part(parts[0], kind, text)
    else:
        expression = ValueList(tuple(_parse_part(part, kind, text) for part in parts))

    verify_for(kind, expression)
    return expression


def parse_cron(expression: str, action: Any = None) -> Schedule:
    """Parse a five-field cron line into a Schedule.

    Args:
        expression: Cron expression string (e.g., "0 */2 * * *")
        action: Opaque payload stored on the schedule

    Returns:
        Validated Schedule
    """
    parts = expression.split()
    if len(parts) != len(FIELD_ORDER):
        raise CronSyntaxError(
            f"Expected {len(FIELD_ORDER)} fields, got {len(parts)} in '{expression}'",
            expression,
        )

    fields = {kind.value: parse_field(part, kind) for kind, part in zip(FIELD_ORDER, parts)}
    return Schedule(action=action, **fields)


def validate_cron(expression: str) -> bool:
    """Validate a cron expression.

    Args:
        expression: Cron expression string (e.g., "0 */2 * * *")

    Returns:
        True if valid, False otherwise
    """
    try:
        parse_cron(expression)
        return True
    except ValueError as e:
        logger.error(f"Invalid cron expression '{expression}': {e}")
        return False


def parse_cron_expression(expression: str, base_time: Optional[datetime] = None) -> Optional[datetime]:
    """Parse cron expression and get next execution time.

    Args:
        expression: Cron expression string
        base_time: Base time for calculation (default: now)

    Returns:
        Next execution datetime or None if invalid or never due
    """
    try:
        schedule = parse_cron(expression)
    except ValueError as e:
        logger.error(f"Failed to parse cron expression '{expression}': {e}")
        return None

    base = base_time or datetime.now()
    return schedule.next_occurrence(base)


def _plural(unit: str, step: int) -> str:
    return f"every {step} {unit}s" if step != 1 else f"every {unit}"


def _describe_names(expression: FieldExpression, names) -> str:
    if isinstance(expression, Single):
        return names(expression.value).name.title()
    if isinstance(expression, Range):
        return f"{names(expression.low).name.title()}-{names(expression.high).name.title()}"
    if isinstance(expression, ValueList) and all(isinstance(i, Single) for i in expression.items):
        return ", ".join(names(i.value).name.title() for i in expression.items)
    return str(expression)


def get_cron_description(schedule: Union[Schedule, str]) -> str:
    """Get human-readable description of a schedule.

    Args:
        schedule: Schedule or cron expression string

    Returns:
        Human-readable description
    """
    # Common patterns
    patterns = {
        "* * * * *": "Every minute",
        "0 * * * *": "Every hour",
        "0 0 * * *": "Daily at midnight",
        "0 12 * * *": "Daily at noon",
        "0 0 1 * *": "Monthly on the 1st at midnight",
        "0 0 1 1 *": "Yearly on January 1st at midnight",
    }

    if isinstance(schedule, str):
        try:
            schedule = parse_cron(schedule)
        except ValueError as e:
            logger.debug(f"Could not describe cron expression '{schedule}': {e}")
            return schedule

    text = str(schedule)
    if text in patterns:
        return patterns[text]

    desc_parts = []

    minute = schedule.minute
    if isinstance(minute, Stepped) and isinstance(minute.base, AnyValue):
        desc_parts.append(_plural("minute", minute.step))
    elif isinstance(minute, Single):
        desc_parts.append(f"at minute {minute.value}")
    elif not isinstance(minute, AnyValue):
        desc_parts.append(f"at minutes {minute}")

    hour = schedule.hour
    if isinstance(hour, Stepped) and isinstance(hour.base, AnyValue):
        desc_parts.append(_plural("hour", hour.step))
    elif isinstance(hour, Single):
        desc_parts.append(f"at hour {hour.value}")
    elif not isinstance(hour, AnyValue):
        desc_parts.append(f"at hours {hour}")

    if not isinstance(schedule.day_of_month, AnyValue):
        desc_parts.append(f"on day {schedule.day_of_month}")

    if not isinstance(schedule.month, AnyValue):
        desc_parts.append(f"in {_describe_names(schedule.month, Month)}")

    if not isinstance(schedule.day_of_week, AnyValue):
        desc_parts.append(f"on {_describe_names(schedule.day_of_week, Weekday)}")

    if desc_parts:
        return "Runs " + ", ".join(desc_parts)
    return "Every minute"

