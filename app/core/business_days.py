"""Business-day generation over a rolling horizon of calendar months."""

import calendar
from collections.abc import Iterable
from datetime import date, timedelta

from app.core.holidays import holiday_set

WEEKDAY_NAMES: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

MONDAY_TO_SATURDAY: frozenset[int] = frozenset(range(6))


def parse_weekdays(names: Iterable[str]) -> frozenset[int]:
    """
    Convert weekday names into ``date.weekday()`` numbers.

    Args:
        names: Lowercase English weekday names

    Returns:
        Set of weekday numbers (Monday is 0)

    Raises:
        ValueError: If a name is not a weekday
    """
    numbers = set()
    for name in names:
        try:
            numbers.add(WEEKDAY_NAMES.index(name.strip().lower()))
        except ValueError:
            raise ValueError(f"Unknown weekday: {name}") from None
    return frozenset(numbers)


def add_months(day: date, months: int) -> date:
    """Shift a date by whole calendar months, clamping to the last day of the month."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def generate_business_days(
    start: date,
    months: int,
    weekdays: Iterable[int] = MONDAY_TO_SATURDAY,
) -> list[date]:
    """
    Generate the business days of a rolling window.

    The window is ``[start, add_months(start, months))``. A day is kept when its
    weekday is in ``weekdays`` and it is not a national holiday of its year.

    Args:
        start: First day of the window (usually today)
        months: Horizon in calendar months
        weekdays: Allowed ``date.weekday()`` numbers, any subset of 0..6

    Returns:
        Ascending list of unique dates
    """
    if months < 0:
        raise ValueError("Horizon must not be negative")

    allowed = frozenset(weekdays)
    end = add_months(start, months)
    if not allowed or end <= start:
        return []

    holidays = holiday_set(range(start.year, end.year + 1))

    days = []
    current = start
    while current < end:
        if current.weekday() in allowed and current.isoformat() not in holidays:
            days.append(current)
        current += timedelta(days=1)
    return days
