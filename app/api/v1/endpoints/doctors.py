"""Doctor endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import RepositoryDep
from app.schemas.doctors import DoctorCreate, DoctorResponse, DoctorUpdate
from app.services.doctor_service import DoctorService

router = APIRouter()


def get_doctor_service(repo: RepositoryDep) -> DoctorService:
    """Get doctor service instance."""
    return DoctorService(repo)


@router.post("/", response_model=DoctorResponse, status_code=status.HTTP_201_CREATED)
async def create_doctor(
    data: DoctorCreate,
    doctor_service: DoctorService = Depends(get_doctor_service),
):
    """
    Create a new doctor.

    - **professional_id**: CRM number, unique across doctors
    - **default_unit_id**: Unit the doctor usually attends
    """
    return await doctor_service.create_doctor(data)


@router.get("/", response_model=list[DoctorResponse])
async def list_doctors(
    status_filter: bool | None = Query(None, alias="status"),
    unit_id: UUID | None = Query(None, description="Filter by default unit"),
    doctor_service: DoctorService = Depends(get_doctor_service),
):
    """List doctors ordered by name."""
    return await doctor_service.list_doctors(status=status_filter, unit_id=unit_id)


@router.get("/{doctor_id}", response_model=DoctorResponse)
async def get_doctor(
    doctor_id: UUID,
    doctor_service: DoctorService = Depends(get_doctor_service),
):
    """Get doctor by ID."""
    return await doctor_service.get_doctor(doctor_id)


@router.put("/{doctor_id}", response_model=DoctorResponse)
async def update_doctor(
    doctor_id: UUID,
    data: DoctorUpdate,
    doctor_service: DoctorService = Depends(get_doctor_service),
):
    """Update doctor information."""
    return await doctor_service.update_doctor(doctor_id, data)


@router.delete("/{doctor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_doctor(
    doctor_id: UUID,
    doctor_service: DoctorService = Depends(get_doctor_service),
) -> None:
    """Delete a doctor."""
    await doctor_service.delete_doctor(doctor_id)
