"""Procedure service for business logic."""

from datetime import UTC, datetime
from uuid import UUID

import structlog
from pydantic import TypeAdapter, ValidationError

from app.core.exceptions import NotFoundException, ValidationException
from app.core.repository import Repository
from app.schemas.procedures import ExamRequirementRule, ProcedureCreate, ProcedureUpdate
from app.services.unit_service import update_values

logger = structlog.get_logger()

_rules_adapter = TypeAdapter(list[ExamRequirementRule])


def dump_rules(rules: list[ExamRequirementRule]) -> list[dict]:
    """Serialize rules for the JSON column."""
    return [rule.model_dump(mode="json") for rule in rules]


def load_rules(procedure: dict) -> list[ExamRequirementRule]:
    """
    Parse the stored exam requirement rules of a procedure.

    Raises:
        ValidationException: If the stored rules are malformed
    """
    try:
        return _rules_adapter.validate_python(procedure.get("exam_requirements") or [])
    except ValidationError as e:
        logger.error(
            "invalid_exam_requirements",
            procedure_id=str(procedure.get("id")),
            errors=e.error_count(),
        )
        raise ValidationException(
            f"Procedure '{procedure.get('name')}' has invalid exam requirements"
        ) from e


class ProcedureService:
    """Service for the procedure catalog."""

    RELATION = "procedures"

    def __init__(self, repo: Repository):
        """Initialize service with repository."""
        self.repo = repo

    async def create_procedure(self, data: ProcedureCreate) -> dict:
        """Create a new procedure."""
        values = data.model_dump(exclude={"exam_requirements"})
        values["exam_requirements"] = dump_rules(data.exam_requirements)
        return await self.repo.insert(self.RELATION, values)

    async def get_procedure(self, procedure_id: UUID) -> dict:
        """Get procedure by ID."""
        procedure = await self.repo.select_one(self.RELATION, eq={"id": procedure_id})
        if not procedure:
            raise NotFoundException("Procedure not found")
        return procedure

    async def list_procedures(self, status: bool | None = None) -> list[dict]:
        """List procedures ordered by name."""
        eq = {"status": status} if status is not None else None
        return await self.repo.select(self.RELATION, eq=eq, order_by=["name"])

    async def update_procedure(self, procedure_id: UUID, data: ProcedureUpdate) -> dict:
        """Update a procedure, replacing its exam rules when given."""
        values = update_values(data)
        if "exam_requirements" in values:
            values["exam_requirements"] = dump_rules(data.exam_requirements or [])
        if not values:
            return await self.get_procedure(procedure_id)

        values["updated_at"] = datetime.now(UTC)
        rows = await self.repo.update(self.RELATION, values, eq={"id": procedure_id})
        if not rows:
            raise NotFoundException("Procedure not found")
        return rows[0]

    async def delete_procedure(self, procedure_id: UUID) -> None:
        """Delete a procedure."""
        if not await self.repo.delete(self.RELATION, eq={"id": procedure_id}):
            raise NotFoundException("Procedure not found")
