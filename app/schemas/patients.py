"""Patient schemas for request/response validation."""

from datetime import date, datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class PatientGender(str, Enum):
    """Patient gender enumeration."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


def normalize_cpf(value: str) -> str:
    """Strip CPF punctuation, keeping the 11 digits."""
    digits = "".join(ch for ch in value if ch.isdigit())
    if len(digits) != 11:
        raise ValueError("CPF must have 11 digits")
    return digits


class PatientBase(BaseModel):
    """Base schema for patient."""

    name: str = Field(..., min_length=1, max_length=255)
    cpf: str | None = None
    rg: str | None = Field(None, max_length=20)
    birth_date: date | None = None
    gender: PatientGender | None = None
    phone: str | None = Field(None, max_length=20)
    email: str | None = Field(None, max_length=255)
    marital_status: str | None = Field(None, max_length=30)
    occupation: str | None = Field(None, max_length=100)
    insurance: str | None = Field(None, max_length=100)
    address: str | None = None
    address_number: str | None = Field(None, max_length=20)
    neighborhood: str | None = Field(None, max_length=100)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, min_length=2, max_length=2)
    zip_code: str | None = Field(None, max_length=9)
    consultation_reason: str | None = None
    notes: str | None = None

    @field_validator("cpf")
    @classmethod
    def validate_cpf(cls, v: str | None) -> str | None:
        """Normalize CPF to digits only."""
        return normalize_cpf(v) if v else None

    @field_validator("birth_date")
    @classmethod
    def validate_birth_date(cls, v: date | None) -> date | None:
        """Validate birth date is not in the future."""
        if v and v > date.today():
            raise ValueError("Birth date cannot be in the future")
        return v


class PatientCreate(PatientBase):
    """Schema for creating a patient."""


class PatientUpdate(BaseModel):
    """Schema for updating a patient."""

    name: str | None = Field(None, min_length=1, max_length=255)
    cpf: str | None = None
    birth_date: date | None = None
    gender: PatientGender | None = None
    phone: str | None = Field(None, max_length=20)
    email: str | None = Field(None, max_length=255)
    address: str | None = None
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, min_length=2, max_length=2)
    notes: str | None = None

    @field_validator("cpf")
    @classmethod
    def validate_cpf(cls, v: str | None) -> str | None:
        """Normalize CPF to digits only."""
        return normalize_cpf(v) if v else None


class PatientResponse(PatientBase):
    """Patient response schema."""

    id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
