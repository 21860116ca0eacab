"""
Developer Registry — Derived Field Unit Tests
===============================================

What we test:
    ✅ Age is a plain year difference (birthday later in the year still counts)
    ✅ Birth date parsing: ISO date, ISO datetime, date objects
    ✅ Unparseable, empty and future dates rejected
    ✅ "N/A" display name for missing levels
"""

from datetime import date

import pytest

from devregistry.exceptions import ValidationError
from devregistry.services.derived import (
    NO_LEVEL_LABEL,
    compute_age,
    level_display_name,
    parse_birth_date,
)


class TestComputeAge:

    def test_year_difference(self):
        assert compute_age(date(1990, 6, 15), today=date(2024, 6, 15)) == 34

    def test_ignores_month_and_day(self):
        """Birthday on Dec 31 has not happened on Jan 1, still counted."""
        assert compute_age(date(2000, 12, 31), today=date(2024, 1, 1)) == 24

    def test_defaults_to_current_year(self):
        assert compute_age(date(1985, 12, 31)) == date.today().year - 1985

    def test_born_this_year_is_zero(self):
        today = date(2024, 3, 1)
        assert compute_age(date(2024, 1, 1), today=today) == 0


class TestParseBirthDate:

    def test_iso_date(self):
        assert parse_birth_date("1990-05-17") == date(1990, 5, 17)

    def test_iso_datetime_keeps_date_part(self):
        assert parse_birth_date("1990-05-17T00:00:00.000Z") == date(1990, 5, 17)

    def test_date_object_passes_through(self):
        assert parse_birth_date(date(1990, 5, 17)) == date(1990, 5, 17)

    def test_surrounding_whitespace_ignored(self):
        assert parse_birth_date(" 1990-05-17 ") == date(1990, 5, 17)

    @pytest.mark.parametrize("value", ["17/05/1990", "not a date", "1990-13-01"])
    def test_unparseable_rejected(self, value):
        with pytest.raises(ValidationError) as exc_info:
            parse_birth_date(value)
        assert exc_info.value.field == "data_nascimento"

    def test_empty_rejected(self):
        with pytest.raises(ValidationError, match="must not be empty"):
            parse_birth_date("")

    def test_future_rejected(self):
        with pytest.raises(ValidationError, match="future"):
            parse_birth_date("2024-06-02", today=date(2024, 6, 1))

    def test_today_accepted(self):
        assert parse_birth_date("2024-06-01", today=date(2024, 6, 1)) == date(2024, 6, 1)


class TestDisplayName:

    def test_level_name_used(self):
        assert level_display_name("Senior") == "Senior"

    def test_missing_level_is_na(self):
        assert level_display_name(None) == NO_LEVEL_LABEL == "N/A"

