"""Tests for field validation."""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models import (
    AnyValue, Single, Range, ValueList, Stepped, FieldKind, InvalidFieldValue,
    Month, Weekday, Schedule, ordinal_for, verify, verify_for,
    verify_for_minute, verify_for_hour, verify_for_day_of_month,
    verify_for_month, verify_for_day_of_week
)


class TestVerify:
    """Test generic bound checking."""

    def test_inverted_range_fails_regardless_of_bounds(self):
        with pytest.raises(InvalidFieldValue):
            verify(Range(20, 5), 0, 1000)

    def test_degenerate_range_fails(self):
        with pytest.raises(InvalidFieldValue):
            verify(Range(5, 5), 0, 60)

    def test_bounds_are_half_open(self):
        verify(Single(0), 0, 60)
        verify(Single(59), 0, 60)
        with pytest.raises(InvalidFieldValue):
            verify(Single(60), 0, 60)

    def test_list_fails_on_any_bad_item(self):
        with pytest.raises(InvalidFieldValue):
            verify(ValueList((Single(1), Range(3, 2))), 0, 60)

    def test_any_and_empty_list_pass(self):
        verify(AnyValue(), 0, 60)
        verify(ValueList(()), 0, 60)

    def test_stepped_checks_step_and_base(self):
        verify(Stepped(Range(10, 20), 5), 0, 60)
        with pytest.raises(InvalidFieldValue):
            verify(Stepped(AnyValue(), 60), 0, 60)
        with pytest.raises(InvalidFieldValue):
            verify(Stepped(AnyValue(), 0), 0, 60)
        with pytest.raises(InvalidFieldValue):
            verify(Stepped(Range(0, 100), 5), 0, 60)
        with pytest.raises(InvalidFieldValue):
            verify(Stepped(Range(9, 3), 2), 0, 60)

    def test_nested_stepped_is_rejected(self):
        with pytest.raises(InvalidFieldValue):
            verify(Stepped(Stepped(AnyValue(), 2), 3), 0, 60)

    def test_step_inside_stepped_list_is_rejected(self):
        nested = Stepped(ValueList((Single(10), Stepped(AnyValue(), 2))), 3)
        with pytest.raises(InvalidFieldValue) as exc_info:
            verify_for_minute(nested)
        assert exc_info.value.expression == Stepped(AnyValue(), 2)
        with pytest.raises(InvalidFieldValue):
            Schedule.build(minute=nested)

    def test_steps_side_by_side_in_a_list_are_allowed(self):
        verify_for_minute(ValueList((Stepped(AnyValue(), 2), Stepped(Range(30, 50), 5))))

    def test_error_carries_context(self):
        with pytest.raises(InvalidFieldValue) as exc_info:
            verify_for(FieldKind.HOUR, Single(24))
        assert exc_info.value.kind == FieldKind.HOUR
        assert exc_info.value.expression == Single(24)
        assert "hour" in str(exc_info.value)


class TestFieldBounds:
    """Test per-field domains."""

    def test_minute(self):
        verify_for_minute(Range(0, 59))
        with pytest.raises(InvalidFieldValue):
            verify_for_minute(Single(60))

    def test_hour(self):
        verify_for_hour(Single(23))
        with pytest.raises(InvalidFieldValue):
            verify_for_hour(Range(20, 24))

    def test_day_of_month(self):
        verify_for_day_of_month(Range(1, 31))
        with pytest.raises(InvalidFieldValue):
            verify_for_day_of_month(Single(0))
        with pytest.raises(InvalidFieldValue):
            verify_for_day_of_month(Single(32))

    def test_month(self):
        verify_for_month(Stepped(Range(1, 12), 5))
        with pytest.raises(InvalidFieldValue):
            verify_for_month(Single(0))
        with pytest.raises(InvalidFieldValue):
            verify_for_month(Single(13))

    def test_day_of_week(self):
        verify_for_day_of_week(Range(0, 6))
        with pytest.raises(InvalidFieldValue):
            verify_for_day_of_week(Single(7))
        with pytest.raises(InvalidFieldValue):
            verify_for_day_of_week(ValueList((Single(1), Single(31))))


class TestOrdinals:
    """Test named value conversion."""

    def test_numbers(self):
        assert ordinal_for(FieldKind.MINUTE, "5") == 5
        assert ordinal_for(FieldKind.MINUTE, 7) == 7

    def test_month_names(self):
        assert ordinal_for(FieldKind.MONTH, "jan") == Month.JAN == 1
        assert ordinal_for(FieldKind.MONTH, "December") == 12

    def test_weekday_names_start_on_monday(self):
        assert ordinal_for(FieldKind.DAY_OF_WEEK, "MON") == Weekday.MON == 0
        assert ordinal_for(FieldKind.DAY_OF_WEEK, "sunday") == 6

    def test_unknown_name(self):
        with pytest.raises(InvalidFieldValue):
            ordinal_for(FieldKind.MONTH, "smarch")
        with pytest.raises(InvalidFieldValue):
            ordinal_for(FieldKind.MINUTE, "mon")

    @pytest.mark.parametrize("text,kind", [
        ("monkey", FieldKind.DAY_OF_WEEK),
        ("junk", FieldKind.MONTH),
        ("janu", FieldKind.MONTH),
        ("monday", FieldKind.MONTH),
    ])
    def test_name_must_be_abbreviation_or_full_name(self, text, kind):
        with pytest.raises(InvalidFieldValue):
            ordinal_for(kind, text)
