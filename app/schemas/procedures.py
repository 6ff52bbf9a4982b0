"""Procedure schemas for request/response validation."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator


class Gender(str, Enum):
    """Gender guard values of an exam requirement rule."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    ALL = "all"


# ============================================================================
# Exam Requirement Rules
# ============================================================================


class ExamRequirementRule(BaseModel):
    """
    A guarded rule contributing exams to a procedure's requirement list.

    The rule applies to a patient when every guard passes: gender matches (or
    is ``all``), age falls in the inclusive ``[age_min, age_max]`` range, and
    the patient has at least one of ``conditions`` (if any are listed).
    """

    id: UUID = Field(default_factory=uuid4)
    gender: Gender = Gender.ALL
    age_min: int | None = Field(None, ge=0, le=150)
    age_max: int | None = Field(None, ge=0, le=150)
    conditions: list[str] = Field(default_factory=list)
    exams: list[str] = Field(..., min_length=1)

    @field_validator("conditions", "exams")
    @classmethod
    def strip_blank_entries(cls, v: list[str]) -> list[str]:
        """Trim entries and drop empty ones."""
        return [item.strip() for item in v if item and item.strip()]

    @model_validator(mode="after")
    def validate_age_range(self) -> "ExamRequirementRule":
        """Validate the age bounds are ordered."""
        if self.age_min is not None and self.age_max is not None and self.age_min > self.age_max:
            raise ValueError("age_min must not be greater than age_max")
        if not self.exams:
            raise ValueError("A rule must list at least one exam")
        return self

    @property
    def has_age_bounds(self) -> bool:
        """Whether the rule restricts age at all."""
        return self.age_min is not None or self.age_max is not None


# ============================================================================
# Procedure Schemas
# ============================================================================


class ProcedureBase(BaseModel):
    """Base schema for procedure."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    duration_minutes: int | None = Field(None, ge=5, le=720)
    price_cash: Decimal | None = Field(None, ge=0, decimal_places=2)
    price_card: Decimal | None = Field(None, ge=0, decimal_places=2)
    max_installments: int | None = Field(None, ge=1, le=24)
    exam_requirements: list[ExamRequirementRule] = Field(default_factory=list)


class ProcedureCreate(ProcedureBase):
    """Schema for creating a procedure."""


class ProcedureUpdate(BaseModel):
    """Schema for updating a procedure."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    duration_minutes: int | None = Field(None, ge=5, le=720)
    price_cash: Decimal | None = Field(None, ge=0, decimal_places=2)
    price_card: Decimal | None = Field(None, ge=0, decimal_places=2)
    max_installments: int | None = Field(None, ge=1, le=24)
    exam_requirements: list[ExamRequirementRule] | None = None
    status: bool | None = None


class ProcedureResponse(ProcedureBase):
    """Procedure response schema."""

    id: UUID
    status: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_serializer("price_cash", "price_card", when_used="json")
    def serialize_decimal(self, value: Decimal | None) -> float | None:
        """Serialize Decimal to float for JSON."""
        return float(value) if value is not None else None
