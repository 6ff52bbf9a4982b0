"""Appointment endpoints."""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import CacheDep, RepositoryDep
from app.schemas.appointments import (
    AppointmentCreate,
    AppointmentFilters,
    AppointmentListResponse,
    AppointmentResponse,
    AppointmentStatus,
    AppointmentStatusUpdate,
    AppointmentUpdate,
)
from app.services.appointment_service import AppointmentService

router = APIRouter()


def get_appointment_service(repo: RepositoryDep, cache_manager: CacheDep) -> AppointmentService:
    """Get appointment service instance."""
    return AppointmentService(repo, cache_manager)


AppointmentServiceDep = Annotated[AppointmentService, Depends(get_appointment_service)]


@router.post(
    "/",
    response_model=AppointmentResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Appointments"],
    summary="Create new appointment",
)
async def create_appointment(
    data: AppointmentCreate,
    service: AppointmentServiceDep,
) -> AppointmentResponse:
    """
    Book a new appointment.

    The window must not overlap any other appointment of the same unit on
    the same day. Windows that only touch, such as 09:00-09:30 followed by
    09:30-10:00, are accepted.

    Args:
        data: Appointment creation data
        service: Appointment service

    Returns:
        Created appointment
    """
    return await service.create_appointment(data)


@router.get(
    "/",
    response_model=AppointmentListResponse,
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="List appointments",
)
async def list_appointments(
    service: AppointmentServiceDep,
    status_filter: AppointmentStatus | None = Query(None, alias="status"),
    unit_id: UUID | None = Query(None),
    doctor_id: UUID | None = Query(None),
    from_date: date | None = Query(None),
    to_date: date | None = Query(None),
) -> AppointmentListResponse:
    """
    List appointments with filtering.

    Args:
        service: Appointment service
        status_filter: Filter by status
        unit_id: Filter by unit ID
        doctor_id: Filter by doctor ID
        from_date: First date included
        to_date: Last date included

    Returns:
        Appointments ordered by date and start time
    """
    filters = AppointmentFilters(
        status=status_filter,
        unit_id=unit_id,
        doctor_id=doctor_id,
        from_date=from_date,
        to_date=to_date,
    )
    items = await service.list_appointments(filters)
    return AppointmentListResponse(total=len(items), items=items)


@router.get(
    "/{appointment_id}",
    response_model=AppointmentResponse,
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="Get appointment by ID",
)
async def get_appointment(
    appointment_id: UUID,
    service: AppointmentServiceDep,
) -> AppointmentResponse:
    """
    Get a specific appointment by ID.

    Args:
        appointment_id: Appointment ID
        service: Appointment service

    Returns:
        Appointment details
    """
    return await service.get_appointment(appointment_id)


@router.put(
    "/{appointment_id}",
    response_model=AppointmentResponse,
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="Update appointment",
)
async def update_appointment(
    appointment_id: UUID,
    data: AppointmentUpdate,
    service: AppointmentServiceDep,
) -> AppointmentResponse:
    """
    Update an existing appointment.

    Moving the appointment re-runs the conflict check, ignoring the
    appointment itself.

    Args:
        appointment_id: Appointment ID
        data: Fields to change
        service: Appointment service

    Returns:
        Updated appointment
    """
    return await service.update_appointment(appointment_id, data)


@router.patch(
    "/{appointment_id}/status",
    response_model=AppointmentResponse,
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="Update appointment status",
)
async def update_appointment_status(
    appointment_id: UUID,
    data: AppointmentStatusUpdate,
    service: AppointmentServiceDep,
) -> AppointmentResponse:
    """
    Update appointment status.

    Args:
        appointment_id: Appointment ID
        data: New status and optional notes
        service: Appointment service

    Returns:
        Updated appointment
    """
    return await service.update_appointment_status(appointment_id, data)


@router.delete(
    "/{appointment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["Appointments"],
    summary="Delete appointment",
)
async def delete_appointment(
    appointment_id: UUID,
    service: AppointmentServiceDep,
) -> None:
    """
    Delete an appointment permanently.

    Args:
        appointment_id: Appointment ID
        service: Appointment service
    """
    await service.delete_appointment(appointment_id)
