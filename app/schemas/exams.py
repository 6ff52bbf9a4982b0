"""Exam request document schemas."""

from pydantic import BaseModel, Field, field_validator

from app.schemas.procedures import Gender


class ExamDocumentRequest(BaseModel):
    """Body of the ``generate-exam-pdf`` endpoint.

    ``cpf`` and ``procedure_id`` are checked by the service so a missing value
    yields a 400 with a plain error message instead of a schema error.
    """

    cpf: str | None = None
    procedure_id: str | None = None
    gender: Gender | None = None
    conditions: list[str] = Field(default_factory=list)

    @field_validator("conditions", mode="before")
    @classmethod
    def default_conditions(cls, v: list[str] | None) -> list[str]:
        """Treat a null condition list as empty."""
        return v or []


class ExamDocumentResponse(BaseModel):
    """Rendered exam request document."""

    success: bool = True
    html: str
    html_base64: str
    patient_name: str
    procedure_name: str
    exam_count: int
    exams: list[str]
