"""Unit availability endpoints."""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import CacheDep, RepositoryDep
from app.schemas.availabilities import (
    AvailabilityBatchCreate,
    AvailabilityBatchResponse,
    AvailabilityDateUpdateResponse,
    AvailabilityPreviewResponse,
    AvailabilityResponse,
    CandidateDatesResponse,
    TimeWindowSchema,
)
from app.schemas.calendar import Weekday
from app.services.availability_service import AvailabilityService

router = APIRouter()


def get_availability_service(repo: RepositoryDep, cache_manager: CacheDep) -> AvailabilityService:
    """Get availability service instance."""
    return AvailabilityService(repo, cache_manager)


AvailabilityServiceDep = Annotated[AvailabilityService, Depends(get_availability_service)]

DEFAULT_WEEKDAYS = [
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
    Weekday.SATURDAY,
]


@router.post(
    "/",
    response_model=AvailabilityBatchResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Configure unit availability",
)
async def create_availabilities(
    data: AvailabilityBatchCreate,
    service: AvailabilityServiceDep,
) -> AvailabilityBatchResponse:
    """
    Store a unit's attendance configuration.

    Every attendance date gets one general record. Procedure dates, which
    must also be attendance dates, get one additional record per selected
    procedure. A date without an entry in `time_overrides` uses the default
    window. Dates that were already configured are replaced.

    Args:
        data: Unit, dates, overrides and procedures
        service: Availability service

    Returns:
        Stored records
    """
    items = await service.create_batch(data)
    dates = {item["availability_date"] for item in items}
    return AvailabilityBatchResponse(dates=len(dates), created=len(items), items=items)


@router.post(
    "/preview",
    response_model=AvailabilityPreviewResponse,
    status_code=status.HTTP_200_OK,
    summary="Preview unit availability",
)
async def preview_availabilities(
    data: AvailabilityBatchCreate,
    service: AvailabilityServiceDep,
) -> AvailabilityPreviewResponse:
    """Materialize a configuration without storing it."""
    slots = service.preview_batch(data)
    general = sum(1 for slot in slots if slot.is_general)
    return AvailabilityPreviewResponse(
        general_count=general,
        procedure_count=len(slots) - general,
        items=[slot.as_row() for slot in slots],
    )


@router.get(
    "/candidates",
    response_model=CandidateDatesResponse,
    status_code=status.HTTP_200_OK,
    summary="Suggest attendance dates",
)
async def candidate_dates(
    weekdays: list[Weekday] = Query(DEFAULT_WEEKDAYS, description="Attendance weekdays"),
    procedure_weekdays: list[Weekday] = Query([], description="Procedure weekdays"),
    months: int | None = Query(None, ge=1, le=24, description="Horizon in months"),
    start: date | None = Query(None, description="First day of the horizon"),
) -> CandidateDatesResponse:
    """
    Offer the non-holiday business days of a rolling horizon.

    Args:
        weekdays: Weekdays the unit attends
        procedure_weekdays: Weekdays procedures are performed
        months: Horizon length, defaults to the configured horizon
        start: First day of the horizon, defaults to today

    Returns:
        Candidate attendance and procedure dates
    """
    window_start, window_end, attendance, procedure = AvailabilityService.candidate_dates(
        weekdays, procedure_weekdays, months=months, start=start
    )
    return CandidateDatesResponse(
        start=window_start,
        end=window_end,
        weekdays=weekdays,
        procedure_weekdays=procedure_weekdays,
        attendance_dates=attendance,
        procedure_dates=procedure,
    )


@router.get(
    "/",
    response_model=list[AvailabilityResponse],
    status_code=status.HTTP_200_OK,
    summary="List unit availability",
)
async def list_availabilities(
    service: AvailabilityServiceDep,
    unit_id: UUID = Query(..., description="Unit ID"),
    from_date: date | None = Query(None),
    to_date: date | None = Query(None),
) -> list[AvailabilityResponse]:
    """List a unit's availability records ordered by date, general record first."""
    return await service.list_availabilities(unit_id, from_date, to_date)


@router.put(
    "/units/{unit_id}/dates/{availability_date}",
    response_model=AvailabilityDateUpdateResponse,
    status_code=status.HTTP_200_OK,
    summary="Change the hours of a date",
)
async def update_date_window(
    unit_id: UUID,
    availability_date: date,
    window: TimeWindowSchema,
    service: AvailabilityServiceDep,
) -> AvailabilityDateUpdateResponse:
    """
    Change the window of every record of a unit on a date.

    Args:
        unit_id: Unit ID
        availability_date: Configured date
        window: New start and end times
        service: Availability service

    Returns:
        Updated records
    """
    items = await service.update_date_window(unit_id, availability_date, window)
    return AvailabilityDateUpdateResponse(
        unit_id=unit_id,
        availability_date=availability_date,
        updated=len(items),
        items=items,
    )


@router.delete(
    "/units/{unit_id}/dates/{availability_date}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a date",
)
async def delete_date(
    unit_id: UUID,
    availability_date: date,
    service: AvailabilityServiceDep,
) -> None:
    """Remove every record of a unit on a date."""
    await service.delete_date(unit_id, availability_date)


@router.delete(
    "/{availability_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove an availability record",
)
async def delete_availability(
    availability_id: UUID,
    service: AvailabilityServiceDep,
) -> None:
    """Remove a single availability record."""
    await service.delete_availability(availability_id)
