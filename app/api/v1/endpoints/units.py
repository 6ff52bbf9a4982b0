"""Unit management endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import RepositoryDep
from app.schemas.units import UnitCreate, UnitResponse, UnitUpdate
from app.services.unit_service import UnitService

router = APIRouter()


def get_unit_service(repo: RepositoryDep) -> UnitService:
    """Get unit service instance."""
    return UnitService(repo)


@router.post("/", response_model=UnitResponse, status_code=status.HTTP_201_CREATED)
async def create_unit(
    data: UnitCreate,
    unit_service: UnitService = Depends(get_unit_service),
):
    """
    Create a new unit.

    - **name**: Unit name (required)
    - **address**: Street address (required)
    - **cnpj**: Company registration number, unique across units
    """
    return await unit_service.create_unit(data)


@router.get("/", response_model=list[UnitResponse])
async def list_units(
    status_filter: bool | None = Query(None, alias="status", description="Filter by active status"),
    unit_service: UnitService = Depends(get_unit_service),
):
    """List units ordered by name."""
    return await unit_service.list_units(status=status_filter)


@router.get("/{unit_id}", response_model=UnitResponse)
async def get_unit(
    unit_id: UUID,
    unit_service: UnitService = Depends(get_unit_service),
):
    """Get unit details by ID."""
    return await unit_service.get_unit(unit_id)


@router.put("/{unit_id}", response_model=UnitResponse)
async def update_unit(
    unit_id: UUID,
    data: UnitUpdate,
    unit_service: UnitService = Depends(get_unit_service),
):
    """Update unit information. Only provided fields are changed."""
    return await unit_service.update_unit(unit_id, data)


@router.delete("/{unit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_unit(
    unit_id: UUID,
    unit_service: UnitService = Depends(get_unit_service),
) -> None:
    """Delete a unit and every availability record it owns."""
    await unit_service.delete_unit(unit_id)
