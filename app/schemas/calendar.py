"""Calendar schemas for holiday and business-day queries."""

from datetime import date
from enum import Enum

from pydantic import BaseModel

from app.core.holidays import HolidayKind


class Weekday(str, Enum):
    """Weekday enumeration, in ``date.weekday()`` order."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


class HolidayResponse(BaseModel):
    """Holiday response schema."""

    date: date
    name: str
    kind: HolidayKind

    model_config = {"from_attributes": True}


class HolidayListResponse(BaseModel):
    """Holidays of a year."""

    year: int
    items: list[HolidayResponse]


class BusinessDaysResponse(BaseModel):
    """Business days of a rolling window ``[start, end)``."""

    start: date
    end: date
    weekdays: list[Weekday]
    count: int
    dates: list[date]
