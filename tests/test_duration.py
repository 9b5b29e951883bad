"""Tests for the Duration value."""

import logging

import pytest
from pydantic import ValidationError

from gitime.duration import Duration


class TestDurationAdd:
    """Tests for adding durations together."""

    def test_add_sums_each_field(self):
        """add() sums the five fields pairwise."""
        total = Duration(months=1, weeks=2, days=3, hours=4, minutes=5)
        total.add(Duration(months=0.5, weeks=1, days=1, hours=1.5, minutes=55))

        assert total == Duration(months=1.5, weeks=3, days=4, hours=5.5, minutes=60)

    def test_add_mutates_left_and_returns_it(self):
        """add() updates the accumulator in place and leaves the operand alone."""
        total = Duration(hours=1)
        other = Duration(minutes=30)

        result = total.add(other)

        assert result is total
        assert total == Duration(hours=1, minutes=30)
        assert other == Duration(minutes=30)

    def test_plus_operator_returns_new_instance(self):
        """+ does not touch either operand."""
        a = Duration(days=1)
        b = Duration(hours=2)

        c = a + b

        assert c == Duration(days=1, hours=2)
        assert a == Duration(days=1)
        assert b == Duration(hours=2)

    def test_plus_rejects_other_types(self):
        with pytest.raises(TypeError):
            Duration() + 5

    def test_add_is_commutative(self):
        a = Duration(weeks=1, minutes=15)
        b = Duration(days=2, hours=0.5)

        assert a + b == b + a

    def test_add_is_associative(self):
        a = Duration(months=1)
        b = Duration(hours=3, minutes=10)
        c = Duration(weeks=2, minutes=5)

        assert (a + b) + c == a + (b + c)

    def test_zero_is_identity(self):
        d = Duration(months=2, weeks=1, days=3, hours=4, minutes=5)

        assert Duration() + d == d
        assert d + Duration() == d


class TestDurationToMinutes:
    """Tests for work-calendar conversion."""

    @pytest.mark.parametrize(
        "field, minutes",
        [
            ("minutes", 1),
            ("hours", 60),
            ("days", 480),
            ("weeks", 2400),
            ("months", 9600),
        ],
    )
    def test_unit_multipliers(self, field, minutes):
        """Each unit converts with the 8h day, 5d week, 4w month calendar."""
        assert Duration(**{field: 1}).to_minutes() == minutes
        assert Duration(**{field: 3}).to_minutes() == 3 * minutes

    def test_all_fields_add_up(self):
        d = Duration(months=1, weeks=1, days=1, hours=1, minutes=1)
        assert d.to_minutes() == 9600 + 2400 + 480 + 60 + 1

    def test_fractions_are_truncated(self):
        """Leftover fractions of a minute are dropped, not rounded."""
        assert Duration(minutes=1.9).to_minutes() == 1
        assert Duration(hours=0.999).to_minutes() == 59

    def test_fractional_units(self):
        assert Duration(hours=1.5).to_minutes() == 90
        assert Duration(days=0.5).to_minutes() == 240

    def test_zero(self):
        assert Duration().to_minutes() == 0

    def test_returns_int(self):
        assert isinstance(Duration(hours=1).to_minutes(), int)

    def test_too_large_total_is_logged_and_zeroed(self, caplog):
        """A finite field whose minute count overflows converts to 0."""
        with caplog.at_level(logging.ERROR, logger="gitime.duration"):
            assert Duration(months=1e305).to_minutes() == 0

        assert "too large" in caplog.text

    def test_sum_overflowing_to_infinity_converts_to_zero(self, caplog):
        total = Duration(months=1e308).add(Duration(months=1e308))

        with caplog.at_level(logging.ERROR, logger="gitime.duration"):
            assert total.to_minutes() == 0

        assert "too large" in caplog.text


class TestDurationFormat:
    """Tests for human-readable formatting."""

    def test_hour_and_minutes(self):
        assert Duration(hours=1, minutes=30).format() == "1.0 hour 30.0 minutes"

    def test_zero_formats_to_empty_string(self):
        assert Duration().format() == ""
        assert str(Duration()) == ""

    def test_fields_in_order_and_zero_fields_omitted(self):
        d = Duration(months=2, weeks=1, days=3, hours=0.5, minutes=2)
        assert d.format() == "2.0 months 1.0 week 3.0 days 0.5 hour 2.0 minutes"

    def test_only_non_zero_fields(self):
        assert Duration(weeks=1, minutes=5).format() == "1.0 week 5.0 minutes"

    def test_pluralized_from_two(self):
        """Units are plural only when the value is at least 2.0."""
        assert Duration(days=2).format() == "2.0 days"
        assert Duration(days=1.5).format() == "1.5 day"

    def test_plural_decided_on_value_not_display(self):
        """A value just under 2 displays as 2.0 but stays singular."""
        assert Duration(days=1.99).format() == "2.0 day"

    def test_one_decimal_place(self):
        assert Duration(minutes=45).format() == "45.0 minutes"
        assert Duration(hours=1.25).format() == "1.2 hour"

    def test_str_is_format(self):
        d = Duration(months=1)
        assert str(d) == d.format() == "1.0 month"


class TestDurationValidation:
    """Tests for field constraints."""

    def test_defaults_to_zero(self):
        d = Duration()
        assert d.is_zero()
        assert (d.months, d.weeks, d.days, d.hours, d.minutes) == (0.0, 0.0, 0.0, 0.0, 0.0)

    def test_negative_values_rejected(self):
        with pytest.raises(ValidationError):
            Duration(hours=-1)

    def test_is_zero(self):
        assert not Duration(minutes=0.1).is_zero()
