"""Tests for offertory.dates pure functions."""

import pytest

from offertory.dates import day_of_week_label, is_iso_date, one_year_before, parse_iso_date, week_start, year_range
from offertory.domain.models import IsoDate


class TestParseIsoDate:
    """Tests for parse_iso_date."""

    def test_valid_date(self) -> None:
        """Should parse a zero-padded date."""
        result = parse_iso_date("2024-06-09")

        assert result is not None
        assert (result.year, result.month, result.day) == (2024, 6, 9)

    def test_rejects_unpadded_date(self) -> None:
        """Should reject dates that would not sort as strings."""
        assert parse_iso_date("2024-6-9") is None

    def test_rejects_space_padded_day(self) -> None:
        """Should reject a ten-character date padded with a space."""
        assert parse_iso_date("2024-06- 9") is None
        assert not is_iso_date("2024-06- 9")

    def test_rejects_other_iso_forms(self) -> None:
        """Should reject compact and week-date spellings."""
        assert parse_iso_date("20240609") is None
        assert parse_iso_date("2024-W23-7") is None

    def test_rejects_impossible_date(self) -> None:
        """Should reject a day that does not exist."""
        assert parse_iso_date("2023-02-29") is None

    def test_rejects_non_string(self) -> None:
        """Should reject values that are not strings."""
        assert parse_iso_date(20240609) is None
        assert parse_iso_date(None) is None

    def test_is_iso_date(self) -> None:
        """Should mirror parse_iso_date as a boolean."""
        assert is_iso_date("2024-02-29")
        assert not is_iso_date("2024/02/29")


class TestWeekStart:
    """Tests for week_start."""

    def test_sunday_is_its_own_start(self) -> None:
        """Should return the same day for a Sunday."""
        assert week_start(IsoDate("2024-06-09")) == "2024-06-09"

    def test_midweek(self) -> None:
        """Should go back to the previous Sunday."""
        assert week_start(IsoDate("2024-06-12")) == "2024-06-09"

    def test_saturday(self) -> None:
        """Should go back six days from a Saturday."""
        assert week_start(IsoDate("2024-06-15")) == "2024-06-09"

    def test_crosses_year_boundary(self) -> None:
        """Should handle a week that started in the previous year."""
        # 2025-01-01 is a Wednesday
        assert week_start(IsoDate("2025-01-01")) == "2024-12-29"

    def test_invalid_date_raises(self) -> None:
        """Should raise for an invalid date."""
        with pytest.raises(ValueError):
            week_start(IsoDate("2024-02-30"))


class TestYearRange:
    """Tests for year_range."""

    def test_calendar_year(self) -> None:
        """Should span 1 January to 31 December."""
        assert year_range(2024) == ("2024-01-01", "2024-12-31")


class TestOneYearBefore:
    """Tests for one_year_before."""

    def test_regular_day(self) -> None:
        """Should keep month and day."""
        assert one_year_before(IsoDate("2024-06-09")) == "2023-06-09"

    def test_leap_day_rolls_over(self) -> None:
        """Should map 29 February to 1 March."""
        assert one_year_before(IsoDate("2024-02-29")) == "2023-03-01"


class TestDayOfWeekLabel:
    """Tests for day_of_week_label."""

    def test_sunday(self) -> None:
        """Should label Sunday."""
        assert day_of_week_label("2024-06-09") == "(일)"

    def test_wednesday(self) -> None:
        """Should label Wednesday."""
        assert day_of_week_label("2024-06-12") == "(수)"

    def test_invalid(self) -> None:
        """Should return an empty label for an invalid date."""
        assert day_of_week_label("someday") == ""
