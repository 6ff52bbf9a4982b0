"""Doctor service for business logic."""

from datetime import UTC, datetime
from uuid import UUID

from app.core.exceptions import ConflictException, NotFoundException, PersistenceException
from app.core.repository import Repository
from app.schemas.doctors import DoctorCreate, DoctorUpdate
from app.services.unit_service import update_values


class DoctorService:
    """Service for doctor operations."""

    RELATION = "doctors"

    def __init__(self, repo: Repository):
        """Initialize service with repository."""
        self.repo = repo

    async def create_doctor(self, data: DoctorCreate) -> dict:
        """Create a new doctor."""
        try:
            return await self.repo.insert(self.RELATION, data.model_dump())
        except PersistenceException as e:
            if e.violates("doctors_professional_id_key"):
                raise ConflictException(
                    f"Doctor with professional id '{data.professional_id}' already exists"
                ) from e
            raise

    async def get_doctor(self, doctor_id: UUID) -> dict:
        """Get doctor by ID."""
        doctor = await self.repo.select_one(self.RELATION, eq={"id": doctor_id})
        if not doctor:
            raise NotFoundException("Doctor not found")
        return doctor

    async def list_doctors(
        self,
        status: bool | None = None,
        unit_id: UUID | None = None,
    ) -> list[dict]:
        """List doctors ordered by name."""
        eq: dict = {}
        if status is not None:
            eq["status"] = status
        if unit_id is not None:
            eq["default_unit_id"] = unit_id
        return await self.repo.select(self.RELATION, eq=eq, order_by=["name"])

    async def update_doctor(self, doctor_id: UUID, data: DoctorUpdate) -> dict:
        """Update a doctor."""
        values = update_values(data)
        if not values:
            return await self.get_doctor(doctor_id)

        values["updated_at"] = datetime.now(UTC)
        try:
            rows = await self.repo.update(self.RELATION, values, eq={"id": doctor_id})
        except PersistenceException as e:
            if e.violates("doctors_professional_id_key"):
                raise ConflictException(
                    f"Doctor with professional id '{data.professional_id}' already exists"
                ) from e
            raise

        if not rows:
            raise NotFoundException("Doctor not found")
        return rows[0]

    async def delete_doctor(self, doctor_id: UUID) -> None:
        """Delete a doctor."""
        if not await self.repo.delete(self.RELATION, eq={"id": doctor_id}):
            raise NotFoundException("Doctor not found")
