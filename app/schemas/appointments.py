"""Appointment schemas for request/response validation."""

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field, field_serializer, model_validator


class AppointmentStatus(str, Enum):
    """Appointment status enumeration."""

    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class AppointmentBase(BaseModel):
    """Base appointment schema with common fields."""

    patient_id: UUID
    doctor_id: UUID
    unit_id: UUID
    procedure_id: UUID | None = None
    appointment_date: date
    start_time: time
    end_time: time
    is_procedure: bool = False
    notes: str | None = Field(None, max_length=1000)
    amount_paid: Decimal | None = Field(None, ge=0, decimal_places=2)

    @model_validator(mode="after")
    def validate_end_time(self) -> "AppointmentBase":
        """Validate end time is after start time."""
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self


class AppointmentCreate(AppointmentBase):
    """Schema for creating a new appointment."""

    status: AppointmentStatus = AppointmentStatus.SCHEDULED


class AppointmentUpdate(BaseModel):
    """Schema for updating an existing appointment."""

    patient_id: UUID | None = None
    doctor_id: UUID | None = None
    unit_id: UUID | None = None
    procedure_id: UUID | None = None
    appointment_date: date | None = None
    start_time: time | None = None
    end_time: time | None = None
    is_procedure: bool | None = None
    status: AppointmentStatus | None = None
    notes: str | None = Field(None, max_length=1000)
    amount_paid: Decimal | None = Field(None, ge=0, decimal_places=2)

    @property
    def touches_schedule(self) -> bool:
        """Whether the update moves the appointment in time or space."""
        fields = self.model_fields_set
        return bool(fields & {"unit_id", "appointment_date", "start_time", "end_time"})


class AppointmentStatusUpdate(BaseModel):
    """Schema for updating appointment status."""

    status: AppointmentStatus
    notes: str | None = Field(None, max_length=1000)


class AppointmentResponse(AppointmentBase):
    """Schema for appointment response."""

    id: UUID
    patient_id: UUID | None
    doctor_id: UUID | None
    status: AppointmentStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_serializer("amount_paid", when_used="json")
    def serialize_decimal(self, value: Decimal | None) -> float | None:
        """Serialize Decimal to float for JSON."""
        return float(value) if value is not None else None


class AppointmentListResponse(BaseModel):
    """Schema for appointment list response."""

    total: int
    items: list[AppointmentResponse]


class AppointmentFilters(BaseModel):
    """Schema for appointment filtering."""

    status: AppointmentStatus | None = None
    unit_id: UUID | None = None
    doctor_id: UUID | None = None
    from_date: date | None = None
    to_date: date | None = None

    def cache_key(self) -> str:
        """Cache key for the list matching these filters."""
        return (
            f"appointment:list:{self.unit_id}:{self.doctor_id}:"
            f"{self.from_date}:{self.to_date}:{self.status.value if self.status else None}"
        )
