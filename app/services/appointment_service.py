"""Appointment service for business logic."""

from datetime import UTC, date, datetime, time
from typing import Any
from uuid import UUID

import structlog

from app.config import settings
from app.core.exceptions import (
    BookingConflictException,
    ConflictException,
    NotFoundException,
    PersistenceException,
    ValidationException,
)
from app.core.intervals import find_conflict
from app.core.redis_client import CacheKeys, CacheManager
from app.core.repository import Repository
from app.models.appointments import APPOINTMENT_OVERLAP_CONSTRAINT
from app.schemas.appointments import (
    AppointmentCreate,
    AppointmentFilters,
    AppointmentStatusUpdate,
    AppointmentUpdate,
)
from app.services.unit_service import update_values

logger = structlog.get_logger()


class AppointmentService:
    """
    Service for managing appointments.

    Every write invalidates the cached appointment lists.
    """

    RELATION = "appointments"

    # Referenced relation for each foreign key checked before writing
    REFERENCES = {
        "patient_id": ("patients", "Patient not found"),
        "doctor_id": ("doctors", "Doctor not found"),
        "unit_id": ("units", "Unit not found"),
        "procedure_id": ("procedures", "Procedure not found"),
    }

    def __init__(self, repo: Repository, cache_manager: CacheManager | None = None):
        """Initialize service with repository and optional cache manager."""
        self.repo = repo
        self.cache = cache_manager

    def _invalidate(self) -> None:
        if self.cache:
            self.cache.invalidate(CacheKeys.APPOINTMENT_LISTS)

    async def _ensure_references(self, values: dict[str, Any]) -> None:
        for field, (relation, message) in self.REFERENCES.items():
            ref_id = values.get(field)
            if ref_id is not None and not await self.repo.select_one(relation, eq={"id": ref_id}):
                raise NotFoundException(message)

    async def check_conflicts(
        self,
        unit_id: UUID,
        appointment_date: date,
        start_time: time,
        end_time: time,
        exclude_id: UUID | None = None,
    ) -> None:
        """
        Reject a window overlapping another appointment of the same unit and day.

        Args:
            unit_id: Unit of the candidate appointment
            appointment_date: Day of the candidate appointment
            start_time: Candidate start
            end_time: Candidate end
            exclude_id: Appointment being edited, ignored in the comparison

        Raises:
            BookingConflictException: Naming the first overlapping window
        """
        existing = await self.repo.select(
            self.RELATION,
            eq={"unit_id": unit_id, "appointment_date": appointment_date},
            not_eq={"id": exclude_id} if exclude_id else None,
            order_by=["start_time"],
        )

        conflict = find_conflict(start_time, end_time, existing)
        if conflict:
            logger.info(
                "appointment_conflict_detected",
                unit_id=str(unit_id),
                date=appointment_date.isoformat(),
                requested=f"{start_time}-{end_time}",
                existing_id=str(conflict["id"]),
            )
            raise BookingConflictException(conflict["start_time"], conflict["end_time"])

    async def _write(self, values: dict[str, Any], appointment_id: UUID | None = None) -> dict:
        """Insert or update, mapping storage-level overlap rejections to booking conflicts."""
        try:
            if appointment_id is None:
                return await self.repo.insert(self.RELATION, values)
            rows = await self.repo.update(self.RELATION, values, eq={"id": appointment_id})
            if not rows:
                raise NotFoundException("Appointment not found")
            return rows[0]
        except PersistenceException as e:
            if not e.violates(APPOINTMENT_OVERLAP_CONSTRAINT):
                raise
            # A concurrent booking committed between the check and the write
            current = values
            if appointment_id is not None:
                current = {**await self.get_appointment(appointment_id), **values}
            await self.check_conflicts(
                current["unit_id"],
                current["appointment_date"],
                current["start_time"],
                current["end_time"],
                exclude_id=appointment_id,
            )
            raise ConflictException("The appointment overlaps another booking") from e

    async def create_appointment(self, data: AppointmentCreate) -> dict:
        """
        Book a new appointment.

        Raises:
            NotFoundException: If a referenced record does not exist
            BookingConflictException: If the window overlaps another booking
        """
        values = update_values(data)
        await self._ensure_references(values)
        await self.check_conflicts(
            data.unit_id, data.appointment_date, data.start_time, data.end_time
        )

        appointment = await self._write(values)
        self._invalidate()
        logger.info(
            "appointment_created",
            appointment_id=str(appointment["id"]),
            unit_id=str(data.unit_id),
            date=data.appointment_date.isoformat(),
        )
        return appointment

    async def get_appointment(self, appointment_id: UUID) -> dict:
        """
        Get appointment by ID.

        Raises:
            NotFoundException: If appointment not found
        """
        appointment = await self.repo.select_one(self.RELATION, eq={"id": appointment_id})
        if not appointment:
            raise NotFoundException("Appointment not found")
        return appointment

    async def list_appointments(self, filters: AppointmentFilters) -> list[dict]:
        """List appointments ordered by date and start time, cached per filter set."""
        cache_key = filters.cache_key()
        if self.cache:
            cached = self.cache.get_json(cache_key)
            if cached is not None:
                return cached

        eq: dict[str, Any] = {}
        if filters.unit_id:
            eq["unit_id"] = filters.unit_id
        if filters.doctor_id:
            eq["doctor_id"] = filters.doctor_id
        if filters.status:
            eq["status"] = filters.status.value

        rows = await self.repo.select(
            self.RELATION,
            eq=eq,
            gte={"appointment_date": filters.from_date} if filters.from_date else None,
            lte={"appointment_date": filters.to_date} if filters.to_date else None,
            order_by=["appointment_date", "start_time"],
        )

        if self.cache:
            self.cache.set_json(cache_key, rows, ttl=settings.appointment_list_cache_ttl)
        return rows

    async def update_appointment(self, appointment_id: UUID, data: AppointmentUpdate) -> dict:
        """
        Update an appointment, re-checking conflicts when it moves.

        Raises:
            NotFoundException: If appointment not found
            ValidationException: If the resulting window is empty
            BookingConflictException: If the new window overlaps another booking
        """
        current = await self.get_appointment(appointment_id)
        values = update_values(data)
        if not values:
            return current

        await self._ensure_references(values)

        if data.touches_schedule:
            merged = {**current, **values}
            if merged["end_time"] <= merged["start_time"]:
                raise ValidationException("End time must be after start time")
            await self.check_conflicts(
                merged["unit_id"],
                merged["appointment_date"],
                merged["start_time"],
                merged["end_time"],
                exclude_id=appointment_id,
            )

        values["updated_at"] = datetime.now(UTC)
        appointment = await self._write(values, appointment_id)
        self._invalidate()
        return appointment

    async def update_appointment_status(
        self,
        appointment_id: UUID,
        data: AppointmentStatusUpdate,
    ) -> dict:
        """Update appointment status."""
        current = await self.get_appointment(appointment_id)

        values: dict[str, Any] = {
            "status": data.status.value,
            "updated_at": datetime.now(UTC),
        }
        if data.notes:
            values["notes"] = data.notes

        rows = await self.repo.update(self.RELATION, values, eq={"id": appointment_id})
        if not rows:
            raise NotFoundException("Appointment not found")
        self._invalidate()
        logger.info(
            "appointment_status_changed",
            appointment_id=str(appointment_id),
            old_status=current["status"],
            new_status=data.status.value,
        )
        return rows[0]

    async def delete_appointment(self, appointment_id: UUID) -> None:
        """
        Delete an appointment permanently.

        Raises:
            NotFoundException: If appointment not found
        """
        if not await self.repo.delete(self.RELATION, eq={"id": appointment_id}):
            raise NotFoundException("Appointment not found")
        self._invalidate()
