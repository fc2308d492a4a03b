"""Named calendar values and their ordinals."""

from enum import IntEnum
from typing import Union

from .validation import FIELD_BOUNDS, FieldKind, InvalidFieldValue


class Month(IntEnum):
    JAN = 1
    FEB = 2
    MAR = 3
    APR = 4
    MAY = 5
    JUN = 6
    JUL = 7
    AUG = 8
    SEP = 9
    OCT = 10
    NOV = 11
    DEC = 12


class Weekday(IntEnum):
    # Same numbering as datetime.weekday()
    MON = 0
    TUE = 1
    WED = 2
    THU = 3
    FRI = 4
    SAT = 5
    SUN = 6


NAMED_ORDINALS = {
    FieldKind.MONTH: Month,
    FieldKind.DAY_OF_WEEK: Weekday,
}

FULL_NAMES = {
    "JANUARY", "FEBRUARY", "MARCH", "APRIL", "MAY", "JUNE", "JULY", "AUGUST",
    "SEPTEMBER", "OCTOBER", "NOVEMBER", "DECEMBER",
    "MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", "SATURDAY", "SUNDAY",
}


def ordinal_for(kind: FieldKind, token: Union[str, int]) -> int:
    """Resolve a number or a three-letter name to the field's ordinal.

    Args:
        kind: Field the token belongs to
        token: An int, a decimal string, or a name such as ``"jan"`` or ``"MON"``

    Returns:
        The ordinal value (not yet bound-checked for numeric tokens)
    """
    if isinstance(token, int):
        return int(token)

    text = token.strip()
    if text.isdigit():
        return int(text)

    names = NAMED_ORDINALS.get(kind)
    # Full names are accepted too ("january", "Monday")
    name = text.upper()
    if names is not None and (len(name) == 3 or name in FULL_NAMES):
        try:
            return int(names[name[:3]])
        except KeyError:
            pass

    bounds = FIELD_BOUNDS[kind]
    raise InvalidFieldValue(
        f"Invalid {kind.value} value '{token}': expected a number in "
        f"[{bounds.minimum}, {bounds.maximum}) or a known name",
        kind,
    )
