"""Unit service for business logic."""

from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import UUID

import structlog

from app.core.exceptions import ConflictException, NotFoundException, PersistenceException
from app.core.repository import Repository
from app.schemas.units import UnitCreate, UnitUpdate

logger = structlog.get_logger()


def update_values(data: Any) -> dict[str, Any]:
    """Collect the fields explicitly set on an update schema."""
    values: dict[str, Any] = {}
    for field, value in data.model_dump(exclude_unset=True).items():
        values[field] = value.value if isinstance(value, Enum) else value
    return values


class UnitService:
    """Service for unit operations."""

    RELATION = "units"

    def __init__(self, repo: Repository):
        """Initialize service with repository."""
        self.repo = repo

    async def create_unit(self, data: UnitCreate) -> dict:
        """Create a new unit."""
        try:
            unit = await self.repo.insert(self.RELATION, data.model_dump())
        except PersistenceException as e:
            if e.violates("units_cnpj_key"):
                raise ConflictException(f"Unit with CNPJ '{data.cnpj}' already exists") from e
            raise

        logger.info("unit_created", unit_id=str(unit["id"]))
        return unit

    async def get_unit(self, unit_id: UUID) -> dict:
        """
        Get unit by ID.

        Raises:
            NotFoundException: If unit not found
        """
        unit = await self.repo.select_one(self.RELATION, eq={"id": unit_id})
        if not unit:
            raise NotFoundException("Unit not found")
        return unit

    async def list_units(self, status: bool | None = None) -> list[dict]:
        """List units ordered by name, optionally filtered by status."""
        eq = {"status": status} if status is not None else None
        return await self.repo.select(self.RELATION, eq=eq, order_by=["name"])

    async def update_unit(self, unit_id: UUID, data: UnitUpdate) -> dict:
        """Update a unit."""
        values = update_values(data)
        if not values:
            return await self.get_unit(unit_id)

        values["updated_at"] = datetime.now(UTC)
        try:
            rows = await self.repo.update(self.RELATION, values, eq={"id": unit_id})
        except PersistenceException as e:
            if e.violates("units_cnpj_key"):
                raise ConflictException(f"Unit with CNPJ '{data.cnpj}' already exists") from e
            raise

        if not rows:
            raise NotFoundException("Unit not found")
        return rows[0]

    async def delete_unit(self, unit_id: UUID) -> None:
        """Delete a unit together with its availability records."""
        deleted = await self.repo.delete(self.RELATION, eq={"id": unit_id})
        if not deleted:
            raise NotFoundException("Unit not found")
        logger.info("unit_deleted", unit_id=str(unit_id))
