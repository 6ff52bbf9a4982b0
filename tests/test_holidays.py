"""Tests for the national holiday calendar."""

from datetime import date

import pytest

from app.core.holidays import (
    HolidayKind,
    easter_sunday,
    fixed_holidays,
    holiday_set,
    holidays_for_year,
    is_holiday,
    moving_holidays,
)


@pytest.mark.parametrize(
    ("year", "expected"),
    [
        (2000, date(2000, 4, 23)),
        (2019, date(2019, 4, 21)),
        (2023, date(2023, 4, 9)),
        (2024, date(2024, 3, 31)),
        (2025, date(2025, 4, 20)),
        (2026, date(2026, 4, 5)),
        (2038, date(2038, 4, 25)),
    ],
)
def test_easter_sunday_reference_dates(year: int, expected: date):
    """Test Easter Sunday matches published dates."""
    assert easter_sunday(year) == expected
    assert easter_sunday(year).weekday() == 6


def test_moving_holidays_2025():
    """Test Carnaval, Good Friday and Corpus Christi offsets from Easter."""
    holidays = {h.name: h.date for h in moving_holidays(2025)}

    assert holidays == {
        "Carnaval": date(2025, 3, 4),
        "Sexta-feira Santa": date(2025, 4, 18),
        "Corpus Christi": date(2025, 6, 19),
    }
    assert all(h.kind is HolidayKind.MOVING for h in moving_holidays(2025))


def test_moving_holidays_2024():
    """Test moving holidays for an early Easter."""
    dates = [h.date for h in moving_holidays(2024)]
    assert dates == [date(2024, 2, 13), date(2024, 3, 29), date(2024, 5, 30)]


def test_fixed_holidays():
    """Test the eight fixed holidays keep their day every year."""
    for year in (2024, 2025, 2030):
        days = {(h.date.month, h.date.day) for h in fixed_holidays(year)}
        assert days == {
            (1, 1),
            (4, 21),
            (5, 1),
            (9, 7),
            (10, 12),
            (11, 2),
            (11, 15),
            (12, 25),
        }


@pytest.mark.parametrize("year", [1999, 2023, 2024, 2025, 2100])
def test_holidays_for_year_has_eleven_dates_in_year(year: int):
    """Test every year yields 11 holidays, all inside that year and in order."""
    holidays = holidays_for_year(year)

    assert len(holidays) == 11
    assert all(h.date.year == year for h in holidays)
    assert [h.date for h in holidays] == sorted(h.date for h in holidays)


def test_holiday_set_spans_several_years():
    """Test the set includes holidays from every requested year."""
    days = holiday_set([2024, 2025])

    assert "2024-12-25" in days
    assert "2025-01-01" in days
    assert "2025-03-04" in days
    assert len(days) == 22


def test_is_holiday():
    """Test single-date holiday lookup."""
    assert is_holiday(date(2025, 9, 7))
    assert is_holiday(date(2025, 6, 19))
    assert not is_holiday(date(2025, 6, 20))
