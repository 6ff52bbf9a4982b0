"""Patient service for business logic."""

from datetime import UTC, datetime
from uuid import UUID

from app.core.exceptions import ConflictException, NotFoundException, PersistenceException
from app.core.repository import Repository
from app.schemas.patients import PatientCreate, PatientUpdate, normalize_cpf
from app.services.unit_service import update_values


class PatientService:
    """Service for patient records."""

    RELATION = "patients"

    def __init__(self, repo: Repository):
        """Initialize service with repository."""
        self.repo = repo

    async def create_patient(self, data: PatientCreate) -> dict:
        """Create a new patient."""
        try:
            return await self.repo.insert(self.RELATION, update_values(data))
        except PersistenceException as e:
            if e.violates("patients_cpf_key"):
                raise ConflictException("A patient with this CPF already exists") from e
            raise

    async def get_patient(self, patient_id: UUID) -> dict:
        """Get patient by ID."""
        patient = await self.repo.select_one(self.RELATION, eq={"id": patient_id})
        if not patient:
            raise NotFoundException("Patient not found")
        return patient

    async def get_patient_by_cpf(self, cpf: str) -> dict | None:
        """
        Look a patient up by CPF.

        Args:
            cpf: CPF with or without punctuation

        Returns:
            Patient row, or None if no patient has that CPF
        """
        try:
            digits = normalize_cpf(cpf)
        except ValueError:
            return None
        return await self.repo.select_one(self.RELATION, eq={"cpf": digits})

    async def list_patients(self, name_search: str | None = None) -> list[dict]:
        """List patients ordered by name."""
        return await self.repo.select(
            self.RELATION,
            ilike={"name": name_search} if name_search else None,
            order_by=["name"],
        )

    async def update_patient(self, patient_id: UUID, data: PatientUpdate) -> dict:
        """Update a patient."""
        values = update_values(data)
        if not values:
            return await self.get_patient(patient_id)

        values["updated_at"] = datetime.now(UTC)
        try:
            rows = await self.repo.update(self.RELATION, values, eq={"id": patient_id})
        except PersistenceException as e:
            if e.violates("patients_cpf_key"):
                raise ConflictException("A patient with this CPF already exists") from e
            raise

        if not rows:
            raise NotFoundException("Patient not found")
        return rows[0]

    async def delete_patient(self, patient_id: UUID) -> None:
        """Delete a patient and their appointments."""
        if not await self.repo.delete(self.RELATION, eq={"id": patient_id}):
            raise NotFoundException("Patient not found")
