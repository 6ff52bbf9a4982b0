"""Unit schemas for request/response validation."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class UnitBase(BaseModel):
    """Base schema for unit."""

    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, min_length=2, max_length=2)
    zip_code: str | None = Field(None, pattern=r"^\d{5}-?\d{3}$")
    phone: str | None = Field(None, max_length=20)
    cnpj: str | None = Field(None, max_length=18)


class UnitCreate(UnitBase):
    """Schema for creating a unit."""


class UnitUpdate(BaseModel):
    """Schema for updating a unit."""

    name: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = Field(None, min_length=1)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, min_length=2, max_length=2)
    zip_code: str | None = Field(None, pattern=r"^\d{5}-?\d{3}$")
    phone: str | None = Field(None, max_length=20)
    cnpj: str | None = Field(None, max_length=18)
    status: bool | None = None


class UnitResponse(UnitBase):
    """Unit response schema."""

    id: UUID
    status: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
