"""Field expressions: the constraint set of a single cron field."""

from dataclasses import dataclass
from typing import Any, Optional, Tuple


class FieldExpression:
    """Base class for the closed set of field expression variants.

    Every variant is an immutable value matched against small integer
    ordinals. Named values (months, weekdays) are converted to ordinals
    before they ever reach an expression.
    """

    def matches(self, value: int) -> bool:
        raise NotImplementedError

    def min_value(self) -> Optional[int]:
        raise NotImplementedError

    def next_value(self, current: int, maximum: int) -> Optional[int]:
        """Find the first matching value in ``[current, maximum]``.

        Args:
            current: Value to start scanning from (inclusive)
            maximum: Last value to consider (inclusive)

        Returns:
            The smallest matching value, or None if nothing in range matches
        """
        for value in range(current, maximum + 1):
            if self.matches(value):
                return value
        return None

    def and_(self, other: Any) -> "FieldExpression":
        """Combine with another expression into a list (logical OR)."""
        return ValueList((self, as_expression(other)))

    def every(self, step: int) -> "FieldExpression":
        """Step over this expression; only ranges and wildcards can be stepped."""
        return self

    def within(self, low: int, high: int) -> "FieldExpression":
        """Restrict this expression to the inclusive range ``[low, high]``."""
        return self

    def _fits_within(self, low: int, high: int) -> bool:
        return True


@dataclass(frozen=True)
class AnyValue(FieldExpression):
    """Wildcard (``*``)."""

    def matches(self, value: int) -> bool:
        return True

    def min_value(self) -> Optional[int]:
        return 0

    def and_(self, other: Any) -> FieldExpression:
        return self

    def every(self, step: int) -> FieldExpression:
        return Stepped(self, step)

    def within(self, low: int, high: int) -> FieldExpression:
        return Range(low, high)

    def __str__(self) -> str:
        return "*"


@dataclass(frozen=True)
class Single(FieldExpression):
    value: int

    def matches(self, value: int) -> bool:
        return value == self.value

    def min_value(self) -> Optional[int]:
        return self.value

    def within(self, low: int, high: int) -> FieldExpression:
        if low <= self.value <= high:
            return self
        return ValueList(())

    def _fits_within(self, low: int, high: int) -> bool:
        return low <= self.value <= high

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Range(FieldExpression):
    """Inclusive range; validation requires ``low < high``."""

    low: int
    high: int

    def matches(self, value: int) -> bool:
        return self.low <= value <= self.high

    def min_value(self) -> Optional[int]:
        return self.low

    def every(self, step: int) -> FieldExpression:
        return Stepped(self, step)

    def within(self, low: int, high: int) -> FieldExpression:
        return Range(max(self.low, low), min(self.high, high))

    def _fits_within(self, low: int, high: int) -> bool:
        return low <= self.low and self.high <= high

    def __str__(self) -> str:
        return f"{self.low}-{self.high}"


@dataclass(frozen=True)
class ValueList(FieldExpression):
    """Matches when any item matches. An empty list matches nothing."""

    items: Tuple[FieldExpression, ...] = ()

    def __post_init__(self):
        # Accept any iterable but store a tuple so the value stays hashable
        object.__setattr__(self, "items", tuple(self.items))

    def matches(self, value: int) -> bool:
        return any(item.matches(value) for item in self.items)

    def min_value(self) -> Optional[int]:
        minima = [m for m in (item.min_value() for item in self.items) if m is not None]
        return min(minima) if minima else None

    def and_(self, other: Any) -> FieldExpression:
        return ValueList(self.items + (as_expression(other),))

    def within(self, low: int, high: int) -> FieldExpression:
        return ValueList(tuple(item for item in self.items if item._fits_within(low, high)))

    def _fits_within(self, low: int, high: int) -> bool:
        return all(item._fits_within(low, high) for item in self.items)

    def __str__(self) -> str:
        return ",".join(str(item) for item in self.items)


@dataclass(frozen=True)
class Stepped(FieldExpression):
    """Values reachable from ``base`` in increments of ``step``.

    The meaning depends on the base:

    - ``AnyValue``: multiples of ``step``
    - ``Range(lo, hi)``: ``lo, lo + step, ...`` up to ``hi``
    - ``Single(v)``: ``v`` itself, and only when ``v`` is a multiple of ``step``
    - ``ValueList``: the step distributes over every item
    - ``Stepped``: rejected by validation; matching raises TypeError
    """

    base: FieldExpression
    step: int

    def matches(self, value: int) -> bool:
        base = self.base
        if isinstance(base, AnyValue):
            return value % self.step == 0
        if isinstance(base, Range):
            if value < base.low or value > base.high:
                return False
            return (value - base.low) % self.step == 0
        if isinstance(base, Single):
            return value == base.value and value % self.step == 0
        if isinstance(base, ValueList):
            return any(Stepped(item, self.step).matches(value) for item in base.items)
        raise TypeError(f"Unsupported field expression: {base!r}")

    def min_value(self) -> Optional[int]:
        base_min = self.base.min_value()
        if base_min is None:
            return None
        return base_min - base_min % self.step

    def __str__(self) -> str:
        return f"{self.base}/{self.step}"


def as_expression(value: Any) -> FieldExpression:
    """Coerce a plain Python value into a field expression.

    ``None`` becomes a wildcard, an int a single value, and a list or
    tuple a list of coerced items.
    """
    if isinstance(value, FieldExpression):
        return value
    if value is None:
        return AnyValue()
    if isinstance(value, bool):
        raise TypeError(f"Cannot use {value!r} as a field value")
    if isinstance(value, int):
        return Single(value)
    if isinstance(value, (list, tuple)):
        return ValueList(tuple(as_expression(item) for item in value))
    raise TypeError(f"Cannot use {value!r} as a field value")


def any_value() -> FieldExpression:
    return AnyValue()


def on(value: int) -> FieldExpression:
    return Single(value)


def between(low: int, high: int) -> FieldExpression:
    return Range(low, high)


def one_of(*items: Any) -> FieldExpression:
    return ValueList(tuple(as_expression(item) for item in items))


def every(step: int) -> FieldExpression:
    """Every ``step`` units across the whole field (``*/step``)."""
    return Stepped(AnyValue(), step)


def stepped(base: Any, step: int) -> FieldExpression:
    return Stepped(as_expression(base), step)

