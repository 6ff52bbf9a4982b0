"""Availability schemas for request/response validation."""

from datetime import date, datetime, time
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from app.core.intervals import TimeWindow
from app.schemas.calendar import Weekday


class TimeWindowSchema(BaseModel):
    """A daily ``[start_time, end_time)`` window."""

    start_time: time
    end_time: time

    @model_validator(mode="after")
    def validate_end_time(self) -> "TimeWindowSchema":
        """Validate end time is after start time."""
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self

    def to_window(self) -> TimeWindow:
        """Convert to the domain value object."""
        return TimeWindow(self.start_time, self.end_time)


class AvailabilityBatchCreate(BaseModel):
    """Schema for configuring a unit's attendance dates in bulk."""

    unit_id: UUID
    attendance_dates: list[date] = Field(..., min_length=1)
    procedure_dates: list[date] = Field(default_factory=list)
    time_overrides: dict[date, TimeWindowSchema] = Field(
        default_factory=dict,
        description="Per-date windows; dates without one use the default window",
    )
    procedure_ids: list[UUID] = Field(default_factory=list)
    default_window: TimeWindowSchema | None = None


class AvailabilitySlotPreview(BaseModel):
    """A materialized slot that has not been stored yet."""

    unit_id: UUID
    availability_date: date
    start_time: time
    end_time: time
    is_procedure_day: bool
    procedure_id: UUID | None = None

    model_config = {"from_attributes": True}


class AvailabilityResponse(AvailabilitySlotPreview):
    """Availability response schema."""

    id: UUID
    created_at: datetime


class AvailabilityPreviewResponse(BaseModel):
    """Result of materializing a configuration without storing it."""

    general_count: int
    procedure_count: int
    items: list[AvailabilitySlotPreview]


class AvailabilityBatchResponse(BaseModel):
    """Result of storing a configuration."""

    dates: int
    created: int
    items: list[AvailabilityResponse]


class AvailabilityDateUpdateResponse(BaseModel):
    """Result of changing the window of one date."""

    unit_id: UUID
    availability_date: date
    updated: int
    items: list[AvailabilityResponse]


class CandidateDatesResponse(BaseModel):
    """Business days offered as attendance and procedure dates."""

    start: date
    end: date
    weekdays: list[Weekday]
    procedure_weekdays: list[Weekday]
    attendance_dates: list[date]
    procedure_dates: list[date]
