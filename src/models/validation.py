"""Domain bounds and validation for field expressions."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .field import AnyValue, FieldExpression, Range, Single, Stepped, ValueList


class InvalidFieldValue(ValueError):
    """A field expression falls outside its field's domain or has an inverted range."""

    def __init__(self, message: str, kind: Optional["FieldKind"] = None,
                 expression: Optional[FieldExpression] = None):
        self.kind = kind
        self.expression = expression
        super().__init__(message)


class FieldKind(str, Enum):
    MINUTE = "minute"
    HOUR = "hour"
    DAY_OF_MONTH = "day_of_month"
    MONTH = "month"
    DAY_OF_WEEK = "day_of_week"


@dataclass(frozen=True)
class FieldBounds:
    """Half-open ordinal bounds ``[minimum, maximum)`` of one field."""
    minimum: int
    maximum: int


FIELD_BOUNDS: Dict[FieldKind, FieldBounds] = {
    FieldKind.MINUTE: FieldBounds(0, 60),
    FieldKind.HOUR: FieldBounds(0, 24),
    FieldKind.DAY_OF_MONTH: FieldBounds(1, 32),
    FieldKind.MONTH: FieldBounds(1, 13),
    FieldKind.DAY_OF_WEEK: FieldBounds(0, 7),
}


def verify(expression: FieldExpression, minimum: int, maximum: int,
           kind: Optional[FieldKind] = None) -> None:
    """Check an expression against the half-open bounds ``[minimum, maximum)``.

    Every literal must lie within the bounds, every range must satisfy
    ``low < high``, and a step must be at least 1 and within the bounds.
    Stepped expressions cannot be nested.

    Raises:
        InvalidFieldValue: on the first violation found
    """
    label = kind.value if kind else "field"

    def fail(reason: str, culprit: FieldExpression):
        raise InvalidFieldValue(f"Invalid {label} value '{culprit}': {reason}", kind, culprit)

    def in_bounds(value: int) -> bool:
        return minimum <= value < maximum

    def check(node: FieldExpression, inside_step: bool = False):
        if isinstance(node, AnyValue):
            return
        if isinstance(node, Single):
            if not in_bounds(node.value):
                fail(f"must be in [{minimum}, {maximum})", node)
        elif isinstance(node, Range):
            if node.low >= node.high:
                fail("range start must be lower than its end", node)
            if not (in_bounds(node.low) and in_bounds(node.high)):
                fail(f"range must be in [{minimum}, {maximum})", node)
        elif isinstance(node, ValueList):
            for item in node.items:
                check(item, inside_step)
        elif isinstance(node, Stepped):
            # A step distributes over list items, so a step anywhere below is nested
            if inside_step:
                fail("a stepped expression cannot be stepped again", node)
            if node.step < 1 or not in_bounds(node.step):
                fail(f"step must be at least 1 and in [{minimum}, {maximum})", node)
            check(node.base, inside_step=True)
        else:
            raise TypeError(f"Unsupported field expression: {node!r}")

    check(expression)


def verify_for(kind: FieldKind, expression: FieldExpression) -> None:
    bounds = FIELD_BOUNDS[kind]
    verify(expression, bounds.minimum, bounds.maximum, kind)


def verify_for_minute(expression: FieldExpression) -> None:
    verify_for(FieldKind.MINUTE, expression)


def verify_for_hour(expression: FieldExpression) -> None:
    verify_for(FieldKind.HOUR, expression)


def verify_for_day_of_month(expression: FieldExpression) -> None:
    verify_for(FieldKind.DAY_OF_MONTH, expression)


def verify_for_month(expression: FieldExpression) -> None:
    verify_for(FieldKind.MONTH, expression)


def verify_for_day_of_week(expression: FieldExpression) -> None:
    verify_for(FieldKind.DAY_OF_WEEK, expression)
