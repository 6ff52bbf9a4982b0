"""Procedure catalog endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import RepositoryDep
from app.schemas.procedures import (
    ExamRequirementRule,
    ProcedureCreate,
    ProcedureResponse,
    ProcedureUpdate,
)
from app.services.procedure_service import ProcedureService, load_rules

router = APIRouter()


def get_procedure_service(repo: RepositoryDep) -> ProcedureService:
    """Get procedure service instance."""
    return ProcedureService(repo)


@router.post("/", response_model=ProcedureResponse, status_code=status.HTTP_201_CREATED)
async def create_procedure(
    data: ProcedureCreate,
    procedure_service: ProcedureService = Depends(get_procedure_service),
):
    """
    Create a procedure.

    - **exam_requirements**: Guarded rules listing the exams a patient needs
      before the procedure. Each rule has a gender guard (`male`, `female`,
      `other` or `all`), optional inclusive `age_min`/`age_max`, optional
      `conditions` (any one must match) and the `exams` it contributes.
    """
    return await procedure_service.create_procedure(data)


@router.get("/", response_model=list[ProcedureResponse])
async def list_procedures(
    status_filter: bool | None = Query(None, alias="status"),
    procedure_service: ProcedureService = Depends(get_procedure_service),
):
    """List procedures ordered by name."""
    return await procedure_service.list_procedures(status=status_filter)


@router.get("/{procedure_id}", response_model=ProcedureResponse)
async def get_procedure(
    procedure_id: UUID,
    procedure_service: ProcedureService = Depends(get_procedure_service),
):
    """Get procedure by ID."""
    return await procedure_service.get_procedure(procedure_id)


@router.get("/{procedure_id}/exam-requirements", response_model=list[ExamRequirementRule])
async def get_exam_requirements(
    procedure_id: UUID,
    procedure_service: ProcedureService = Depends(get_procedure_service),
):
    """Get the exam requirement rules of a procedure."""
    procedure = await procedure_service.get_procedure(procedure_id)
    return load_rules(procedure)


@router.put("/{procedure_id}", response_model=ProcedureResponse)
async def update_procedure(
    procedure_id: UUID,
    data: ProcedureUpdate,
    procedure_service: ProcedureService = Depends(get_procedure_service),
):
    """Update a procedure. A given `exam_requirements` list replaces the stored one."""
    return await procedure_service.update_procedure(procedure_id, data)


@router.delete("/{procedure_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_procedure(
    procedure_id: UUID,
    procedure_service: ProcedureService = Depends(get_procedure_service),
) -> None:
    """Delete a procedure."""
    await procedure_service.delete_procedure(procedure_id)
