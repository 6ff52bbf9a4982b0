"""Materialization of availability slots from a schedule configuration."""

from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from datetime import date, time
from uuid import UUID

from app.core.exceptions import ValidationException
from app.core.intervals import TimeWindow


@dataclass(frozen=True)
class AvailabilitySlot:
    """One bookable window of a unit on a date, optionally scoped to a procedure."""

    unit_id: UUID
    availability_date: date
    start_time: time
    end_time: time
    is_procedure_day: bool
    procedure_id: UUID | None = None

    @property
    def is_general(self) -> bool:
        """General attendance records carry no procedure."""
        return self.procedure_id is None

    def as_row(self) -> dict:
        """Column values for the ``availabilities`` relation."""
        return asdict(self)


def build_availability_slots(
    unit_id: UUID,
    attendance_dates: Iterable[date],
    procedure_dates: Iterable[date],
    time_overrides: Mapping[date, TimeWindow],
    procedure_ids: Iterable[UUID],
    default_window: TimeWindow,
) -> list[AvailabilitySlot]:
    """
    Turn a schedule configuration into availability slots.

    Every attendance date yields one general slot. Procedure days that have
    procedures selected yield one extra slot per procedure, sharing the date's
    window. Overrides for dates outside the attendance set are ignored.

    Args:
        unit_id: Unit being configured
        attendance_dates: Dates the unit is open
        procedure_dates: Dates reserved for procedures, a subset of attendance dates
        time_overrides: Per-date windows replacing ``default_window``
        procedure_ids: Procedures offered on procedure days
        default_window: Window used for dates without an override

    Returns:
        Slots ordered by date, general slot first

    Raises:
        ValidationException: If no attendance date is given or a procedure date
            is not an attendance date
    """
    attendance = sorted(set(attendance_dates))
    if not attendance:
        raise ValidationException("Select at least one attendance date")

    procedure_days = set(procedure_dates)
    stray = sorted(procedure_days.difference(attendance))
    if stray:
        listed = ", ".join(d.isoformat() for d in stray)
        raise ValidationException(f"Procedure days must also be attendance dates: {listed}")

    # Preserve selection order while dropping repeats
    procedures = list(dict.fromkeys(procedure_ids))

    slots: list[AvailabilitySlot] = []
    for day in attendance:
        window = time_overrides.get(day, default_window)
        is_procedure_day = day in procedure_days

        slots.append(
            AvailabilitySlot(
                unit_id=unit_id,
                availability_date=day,
                start_time=window.start,
                end_time=window.end,
                is_procedure_day=is_procedure_day,
            )
        )

        if is_procedure_day:
            slots.extend(
                AvailabilitySlot(
                    unit_id=unit_id,
                    availability_date=day,
                    start_time=window.start,
                    end_time=window.end,
                    is_procedure_day=True,
                    procedure_id=procedure_id,
                )
                for procedure_id in procedures
            )

    return slots
