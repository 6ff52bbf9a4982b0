"""Holiday calendar and business-day endpoints."""

from datetime import date

from fastapi import APIRouter, Query, status

from app.config import settings
from app.core.business_days import add_months, generate_business_days, parse_weekdays
from app.core.clock import clinic_today
from app.core.holidays import holidays_for_year
from app.schemas.calendar import (
    BusinessDaysResponse,
    HolidayListResponse,
    HolidayResponse,
    Weekday,
)

router = APIRouter()

WORKING_WEEK = [w for w in Weekday if w is not Weekday.SUNDAY]


@router.get(
    "/holidays",
    response_model=HolidayListResponse,
    status_code=status.HTTP_200_OK,
    summary="List national holidays",
)
async def list_holidays(
    year: int | None = Query(None, ge=1583, le=4099, description="Calendar year"),
) -> HolidayListResponse:
    """
    List the national holidays of a year.

    Eight holidays have fixed dates. Carnaval, Good Friday and Corpus
    Christi move with Easter Sunday.

    Args:
        year: Calendar year, defaults to the current one

    Returns:
        Holidays in date order
    """
    year = year or clinic_today().year
    return HolidayListResponse(
        year=year,
        items=[HolidayResponse.model_validate(h) for h in holidays_for_year(year)],
    )


@router.get(
    "/business-days",
    response_model=BusinessDaysResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate business days",
)
async def business_days(
    weekdays: list[Weekday] = Query(
        WORKING_WEEK,
        description="Weekdays to include",
    ),
    months: int | None = Query(None, ge=0, le=24, description="Horizon in months"),
    start: date | None = Query(None, description="First day of the horizon"),
) -> BusinessDaysResponse:
    """
    Generate the non-holiday dates falling on the given weekdays.

    The horizon runs from `start` up to, but excluding, the same day
    `months` later.

    Args:
        weekdays: Weekdays to include
        months: Horizon length, defaults to the configured horizon
        start: First day, defaults to today

    Returns:
        Dates in ascending order
    """
    start = start or clinic_today()
    months = settings.availability_horizon_months if months is None else months
    dates = generate_business_days(start, months, parse_weekdays(w.value for w in weekdays))
    return BusinessDaysResponse(
        start=start,
        end=add_months(start, months),
        weekdays=weekdays,
        count=len(dates),
        dates=dates,
    )
