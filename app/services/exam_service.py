"""Exam request document generation."""

from datetime import datetime
from uuid import UUID

import structlog

from app.core.clock import clinic_now
from app.core.documents import render_exam_document, to_base64
from app.core.exam_rules import PatientProfile, calculate_age, resolve_required_exams
from app.core.exceptions import BadRequestException, NotFoundException
from app.core.repository import Repository
from app.schemas.exams import ExamDocumentRequest, ExamDocumentResponse
from app.services.patient_service import PatientService
from app.services.procedure_service import ProcedureService, load_rules

logger = structlog.get_logger()


class ExamService:
    """Resolves required exams for a patient and procedure and renders the request document."""

    def __init__(self, repo: Repository):
        """Initialize service with repository."""
        self.patients = PatientService(repo)
        self.procedures = ProcedureService(repo)

    async def generate_exam_document(
        self,
        request: ExamDocumentRequest,
        now: datetime | None = None,
    ) -> ExamDocumentResponse:
        """
        Build the exam request document.

        Args:
            request: Patient CPF, procedure id and optional gender/conditions
            now: Reference time for age calculation and the document footer

        Returns:
            Rendered document and the resolved exam list

        Raises:
            BadRequestException: If CPF or procedure id is missing
            NotFoundException: If the patient or procedure does not exist
        """
        if not request.cpf or not request.procedure_id:
            raise BadRequestException("CPF and procedure id are required")

        now = now or clinic_now()

        patient = await self.patients.get_patient_by_cpf(request.cpf)
        if not patient:
            raise NotFoundException("Patient not found")

        try:
            procedure_id = UUID(request.procedure_id)
        except ValueError:
            raise NotFoundException("Procedure not found") from None
        procedure = await self.procedures.get_procedure(procedure_id)

        age = calculate_age(patient.get("birth_date"), now.date())
        gender = request.gender.value if request.gender else patient.get("gender")
        profile = PatientProfile.build(gender, age, request.conditions)

        rules = load_rules(procedure)
        exams = resolve_required_exams(rules, profile)

        logger.info(
            "exam_requirements_resolved",
            patient_id=str(patient["id"]),
            procedure_id=str(procedure["id"]),
            rules=len(rules),
            exams=len(exams),
        )

        html = render_exam_document(
            patient_name=patient["name"],
            patient_cpf=patient.get("cpf"),
            patient_age=age,
            patient_phone=patient.get("phone"),
            procedure_name=procedure["name"],
            exams=exams,
            generated_at=now,
        )

        return ExamDocumentResponse(
            html=html,
            html_base64=to_base64(html),
            patient_name=patient["name"],
            procedure_name=procedure["name"],
            exam_count=len(exams),
            exams=exams,
        )
