"""Pure date arithmetic for zones."""

from datetime import date, timedelta

from red_zone.domain.errors import DateFormatError

DAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def parse_date(value: str | date) -> date:
    """Return a calendar date from an ISO string or date."""
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise DateFormatError(value)
    try:
        # Drop a time-of-day component, if any.
        return date.fromisoformat(value.strip().split("T", 1)[0])
    except ValueError as exc:
        raise DateFormatError(value) from exc


def project_end_date(begin: str | date, duration_days: int) -> str:
    """Return the ISO end date ``duration_days`` after ``begin``."""
    return (parse_date(begin) + timedelta(days=duration_days)).isoformat()


def range_length_days(begin: str | date, end: str | date) -> int:
    """Return the absolute number of days between two dates."""
    return abs((parse_date(end) - parse_date(begin)).days)


def day_of_week(value: str | date) -> str:
    """Return the weekday name, Sunday first."""
    # date.weekday() is Monday=0; shift so Sunday=0.
    return DAY_NAMES[(parse_date(value).weekday() + 1) % 7]


def format_day_date(value: str | date) -> str:
    """Return a spoken form like ``Monday 2024-01-01``."""
    parsed = parse_date(value)
    return f"{day_of_week(parsed)} {parsed.isoformat()}"
