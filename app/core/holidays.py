"""Brazilian national holiday calendar.

Fixed holidays fall on the same day every year. Moving holidays are offsets
from Easter Sunday, computed with the Gregorian form of Gauss's algorithm.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum


class HolidayKind(str, Enum):
    """Holiday kind enumeration."""

    FIXED = "fixed"
    MOVING = "moving"


@dataclass(frozen=True)
class Holiday:
    """A non-workable calendar date."""

    date: date
    name: str
    kind: HolidayKind


# (month, day, name)
FIXED_HOLIDAYS: tuple[tuple[int, int, str], ...] = (
    (1, 1, "Confraternização Universal"),
    (4, 21, "Tiradentes"),
    (5, 1, "Dia do Trabalho"),
    (9, 7, "Independência do Brasil"),
    (10, 12, "Nossa Senhora Aparecida"),
    (11, 2, "Finados"),
    (11, 15, "Proclamação da República"),
    (12, 25, "Natal"),
)

# (offset in days from Easter Sunday, name)
EASTER_OFFSETS: tuple[tuple[int, str], ...] = (
    (-47, "Carnaval"),
    (-2, "Sexta-feira Santa"),
    (60, "Corpus Christi"),
)


def easter_sunday(year: int) -> date:
    """
    Compute Easter Sunday for a Gregorian year.

    Args:
        year: Gregorian calendar year

    Returns:
        Date of Easter Sunday
    """
    g = year % 19
    c = year // 100
    h = (c - c // 4 - (8 * c + 13) // 25 + 19 * g + 15) % 30
    i = h - (h // 28) * (1 - (h // 28) * (29 // (h + 1)) * ((21 - g) // 11))
    j = (year + year // 4 + i + 2 - c + c // 4) % 7
    l = i - j  # noqa: E741
    month = 3 + (l + 40) // 44
    day = l + 28 - 31 * (month // 4)
    return date(year, month, day)


def fixed_holidays(year: int) -> list[Holiday]:
    """Get the fixed-date holidays of a year."""
    return [
        Holiday(date(year, month, day), name, HolidayKind.FIXED)
        for month, day, name in FIXED_HOLIDAYS
    ]


def moving_holidays(year: int) -> list[Holiday]:
    """Get the Easter-relative holidays of a year."""
    easter = easter_sunday(year)
    return [
        Holiday(easter + timedelta(days=offset), name, HolidayKind.MOVING)
        for offset, name in EASTER_OFFSETS
    ]


def holidays_for_year(year: int) -> list[Holiday]:
    """Get every national holiday of a year, ordered by date."""
    return sorted(fixed_holidays(year) + moving_holidays(year), key=lambda h: h.date)


def holiday_set(years: Iterable[int]) -> set[str]:
    """
    Build the set of holiday ISO dates for the given years.

    A generation window crossing a year boundary must pass every year it
    touches.

    Args:
        years: Years to include

    Returns:
        Set of ``YYYY-MM-DD`` strings
    """
    return {holiday.date.isoformat() for year in set(years) for holiday in holidays_for_year(year)}


def is_holiday(day: date) -> bool:
    """Check whether a date is a national holiday."""
    return day.isoformat() in holiday_set([day.year])
