"""Doctor schemas for request/response validation."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class DoctorBase(BaseModel):
    """Base schema for doctor."""

    name: str = Field(..., min_length=1, max_length=255)
    specialty: str = Field(..., min_length=1, max_length=100)
    professional_id: str = Field(..., min_length=1, max_length=50, description="CRM number")
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=20)
    default_unit_id: UUID | None = None


class DoctorCreate(DoctorBase):
    """Schema for creating a doctor."""


class DoctorUpdate(BaseModel):
    """Schema for updating a doctor."""

    name: str | None = Field(None, min_length=1, max_length=255)
    specialty: str | None = Field(None, min_length=1, max_length=100)
    professional_id: str | None = Field(None, min_length=1, max_length=50)
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=20)
    default_unit_id: UUID | None = None
    status: bool | None = None


class DoctorResponse(DoctorBase):
    """Doctor response schema."""

    id: UUID
    status: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
