"""Availability scheduling service."""

from datetime import date
from uuid import UUID

import structlog

from app.config import settings
from app.core.availability import AvailabilitySlot, build_availability_slots
from app.core.business_days import add_months, generate_business_days, parse_weekdays
from app.core.clock import clinic_today
from app.core.exceptions import NotFoundException, PersistenceException
from app.core.intervals import TimeWindow
from app.core.redis_client import CacheKeys, CacheManager
from app.core.repository import Repository
from app.schemas.availabilities import AvailabilityBatchCreate, TimeWindowSchema
from app.schemas.calendar import Weekday

logger = structlog.get_logger()


def default_window() -> TimeWindow:
    """Daily window used for dates without an override."""
    return TimeWindow(settings.default_start_time, settings.default_end_time)


class AvailabilityService:
    """
    Service for unit availability.

    Writes invalidate every cached availability list of the unit they touch.
    """

    RELATION = "availabilities"

    def __init__(self, repo: Repository, cache_manager: CacheManager | None = None):
        """Initialize service with repository and optional cache manager."""
        self.repo = repo
        self.cache = cache_manager

    def _invalidate(self, unit_id: UUID) -> None:
        if self.cache:
            self.cache.invalidate(CacheKeys.availability_lists(unit_id))

    async def _ensure_unit(self, unit_id: UUID) -> None:
        if not await self.repo.select_one("units", eq={"id": unit_id}):
            raise NotFoundException("Unit not found")

    async def _ensure_procedures(self, procedure_ids: list[UUID]) -> None:
        if not procedure_ids:
            return
        found = await self.repo.select("procedures", in_={"id": procedure_ids})
        missing = set(procedure_ids) - {row["id"] for row in found}
        if missing:
            raise NotFoundException(
                "Procedure not found: " + ", ".join(sorted(str(m) for m in missing))
            )

    def preview_batch(self, data: AvailabilityBatchCreate) -> list[AvailabilitySlot]:
        """
        Materialize a configuration without storing it.

        Raises:
            ValidationException: If the configuration is inconsistent
        """
        window = data.default_window.to_window() if data.default_window else default_window()
        return build_availability_slots(
            unit_id=data.unit_id,
            attendance_dates=data.attendance_dates,
            procedure_dates=data.procedure_dates,
            time_overrides={day: w.to_window() for day, w in data.time_overrides.items()},
            procedure_ids=data.procedure_ids,
            default_window=window,
        )

    async def create_batch(self, data: AvailabilityBatchCreate) -> list[dict]:
        """
        Store a configuration as availability records.

        All records are written in one transaction. Dates already configured
        for the unit are replaced. The first failing insert rolls back the
        whole batch.

        Args:
            data: Unit, dates, overrides and procedures to configure

        Returns:
            Stored records ordered by date

        Raises:
            ValidationException: If the configuration is inconsistent
            NotFoundException: If the unit or a procedure does not exist
            PersistenceException: If a write fails
        """
        slots = self.preview_batch(data)
        await self._ensure_unit(data.unit_id)
        await self._ensure_procedures(list(dict.fromkeys(data.procedure_ids)))

        dates = sorted({slot.availability_date for slot in slots})
        created: list[dict] = []
        try:
            replaced = await self.repo.delete(
                self.RELATION,
                eq={"unit_id": data.unit_id},
                in_={"availability_date": dates},
                commit=False,
            )
            for slot in slots:
                try:
                    created.append(await self.repo.insert(self.RELATION, slot.as_row(), commit=False))
                except PersistenceException as e:
                    raise PersistenceException(
                        f"Failed to save availability for {slot.availability_date.isoformat()}",
                        detail=e.detail,
                    ) from e
            await self.repo.commit()
        except PersistenceException:
            await self.repo.rollback()
            logger.error(
                "availability_batch_failed",
                unit_id=str(data.unit_id),
                dates=len(dates),
                written_before_failure=len(created),
            )
            raise

        self._invalidate(data.unit_id)
        logger.info(
            "availability_batch_created",
            unit_id=str(data.unit_id),
            dates=len(dates),
            records=len(created),
            replaced=replaced,
        )
        return created

    async def list_availabilities(
        self,
        unit_id: UUID,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> list[dict]:
        """List a unit's availability records, cached per date range."""
        cache_key = CacheKeys.availability_list(unit_id, from_date, to_date)
        if self.cache:
            cached = self.cache.get_json(cache_key)
            if cached is not None:
                return cached

        gte = {"availability_date": from_date} if from_date else None
        lte = {"availability_date": to_date} if to_date else None
        rows = await self.repo.select(
            self.RELATION,
            eq={"unit_id": unit_id},
            gte=gte,
            lte=lte,
            order_by=["availability_date", "start_time"],
        )
        # General record first within each date
        rows.sort(key=lambda r: (r["availability_date"], r["procedure_id"] is not None))

        if self.cache:
            self.cache.set_json(cache_key, rows, ttl=settings.availability_list_cache_ttl)
        return rows

    async def update_date_window(
        self,
        unit_id: UUID,
        availability_date: date,
        window: TimeWindowSchema,
    ) -> list[dict]:
        """
        Change the hours of a date, for the general and every procedure record.

        Raises:
            NotFoundException: If the unit has no availability on that date
        """
        rows = await self.repo.update(
            self.RELATION,
            {"start_time": window.start_time, "end_time": window.end_time},
            eq={"unit_id": unit_id, "availability_date": availability_date},
        )
        if not rows:
            raise NotFoundException("No availability configured for this date")

        self._invalidate(unit_id)
        logger.info(
            "availability_date_updated",
            unit_id=str(unit_id),
            date=availability_date.isoformat(),
            records=len(rows),
        )
        return rows

    async def delete_date(self, unit_id: UUID, availability_date: date) -> int:
        """
        Remove every record of a unit on a date.

        Raises:
            NotFoundException: If the unit has no availability on that date
        """
        deleted = await self.repo.delete(
            self.RELATION,
            eq={"unit_id": unit_id, "availability_date": availability_date},
        )
        if not deleted:
            raise NotFoundException("No availability configured for this date")

        self._invalidate(unit_id)
        logger.info(
            "availability_date_deleted",
            unit_id=str(unit_id),
            date=availability_date.isoformat(),
            records=deleted,
        )
        return deleted

    async def delete_availability(self, availability_id: UUID) -> None:
        """Remove a single availability record."""
        row = await self.repo.select_one(self.RELATION, eq={"id": availability_id})
        if not row:
            raise NotFoundException("Availability not found")

        await self.repo.delete(self.RELATION, eq={"id": availability_id})
        self._invalidate(row["unit_id"])

    @staticmethod
    def candidate_dates(
        weekdays: list[Weekday],
        procedure_weekdays: list[Weekday],
        months: int | None = None,
        start: date | None = None,
    ) -> tuple[date, date, list[date], list[date]]:
        """
        Offer attendance and procedure dates for a rolling horizon.

        Procedure dates are drawn from the attendance dates, so only weekdays
        present in both lists produce procedure days.

        Returns:
            Window start, window end (exclusive), attendance dates, procedure dates
        """
        start = start or clinic_today()
        if months is None:
            months = settings.availability_horizon_months
        day_numbers = parse_weekdays(w.value for w in weekdays)
        procedure_numbers = parse_weekdays(w.value for w in procedure_weekdays)

        attendance = generate_business_days(start, months, day_numbers)
        procedure = [d for d in attendance if d.weekday() in procedure_numbers]
        return start, add_months(start, months), attendance, procedure
