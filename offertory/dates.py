"""Date utilities for offertory.

Pure functions for calendar windows and date labels. Dates travel as
zero-padded YYYY-MM-DD strings, so string comparison is chronological.
"""

from datetime import date, timedelta

from offertory.domain.models import IsoDate

DAY_LABELS = ("일", "월", "화", "수", "목", "금", "토")


def parse_iso_date(value: object) -> date | None:
    """Parse a YYYY-MM-DD string.

    Args:
        value: Candidate date value from a stored record.

    Returns:
        The date, or None if the value is not a valid zero-padded ISO date.
    """
    if not isinstance(value, str):
        return None
    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        return None
    # fromisoformat also takes compact and week forms; only the canonical string sorts correctly
    if parsed.isoformat() != value:
        return None
    return parsed


def is_iso_date(value: object) -> bool:
    """Check whether a value is a valid YYYY-MM-DD date string."""
    return parse_iso_date(value) is not None


def _require_date(value: str) -> date:
    day = parse_iso_date(value)
    if day is None:
        raise ValueError(f"Invalid date: {value!r}")
    return day


def week_start(today: IsoDate) -> IsoDate:
    """Calculate the first day of the week containing ``today``.

    Weeks start on Sunday.

    Args:
        today: Current date (YYYY-MM-DD).

    Returns:
        The Sunday on or before ``today`` (YYYY-MM-DD).

    Raises:
        ValueError: If ``today`` is not a valid date.
    """
    day = _require_date(today)
    # date.weekday() is Monday=0; shift so Sunday=0
    offset = (day.weekday() + 1) % 7
    return IsoDate((day - timedelta(days=offset)).isoformat())


def year_range(year: int) -> tuple[IsoDate, IsoDate]:
    """Calculate the inclusive date range of a calendar year.

    Args:
        year: Calendar year.

    Returns:
        Tuple of (first_day, last_day) as YYYY-MM-DD strings.
    """
    return IsoDate(f"{year:04d}-01-01"), IsoDate(f"{year:04d}-12-31")


def one_year_before(today: IsoDate) -> IsoDate:
    """Return the same calendar day one year earlier.

    29 February maps to 1 March.
    """
    day = _require_date(today)
    try:
        return IsoDate(day.replace(year=day.year - 1).isoformat())
    except ValueError:
        return IsoDate(date(day.year - 1, 3, 1).isoformat())


def day_of_week_label(value: str) -> str:
    """Format the weekday of a date as a short Korean label.

    Args:
        value: Date string (YYYY-MM-DD).

    Returns:
        Label such as "(일)", or an empty string for an invalid date.
    """
    day = parse_iso_date(value)
    if day is None:
        return ""
    return f"({DAY_LABELS[(day.weekday() + 1) % 7]})"
