"""Patient endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.core.exceptions import NotFoundException
from app.dependencies import RepositoryDep
from app.schemas.patients import PatientCreate, PatientResponse, PatientUpdate
from app.services.patient_service import PatientService

router = APIRouter()


def get_patient_service(repo: RepositoryDep) -> PatientService:
    """Get patient service instance."""
    return PatientService(repo)


@router.post("/", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def create_patient(
    data: PatientCreate,
    patient_service: PatientService = Depends(get_patient_service),
):
    """Register a patient. The CPF, when given, must be unique."""
    return await patient_service.create_patient(data)


@router.get("/", response_model=list[PatientResponse])
async def list_patients(
    name_search: str | None = Query(None, description="Search patients by name"),
    patient_service: PatientService = Depends(get_patient_service),
):
    """List patients ordered by name."""
    return await patient_service.list_patients(name_search=name_search)


@router.get("/by-cpf/{cpf}", response_model=PatientResponse)
async def get_patient_by_cpf(
    cpf: str,
    patient_service: PatientService = Depends(get_patient_service),
):
    """
    Get a patient by CPF.

    Punctuation in the CPF is ignored.
    """
    patient = await patient_service.get_patient_by_cpf(cpf)
    if not patient:
        raise NotFoundException("Patient not found")
    return patient


@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient(
    patient_id: UUID,
    patient_service: PatientService = Depends(get_patient_service),
):
    """Get patient by ID."""
    return await patient_service.get_patient(patient_id)


@router.put("/{patient_id}", response_model=PatientResponse)
async def update_patient(
    patient_id: UUID,
    data: PatientUpdate,
    patient_service: PatientService = Depends(get_patient_service),
):
    """Update patient information."""
    return await patient_service.update_patient(patient_id, data)


@router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_patient(
    patient_id: UUID,
    patient_service: PatientService = Depends(get_patient_service),
) -> None:
    """Delete a patient and their appointments."""
    await patient_service.delete_patient(patient_id)
