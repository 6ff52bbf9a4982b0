"""Exam request document endpoint."""

from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.core.exceptions import AppException, BadRequestException, NotFoundException
from app.dependencies import RepositoryDep
from app.schemas.exams import ExamDocumentRequest, ExamDocumentResponse
from app.services.exam_service import ExamService

router = APIRouter()
logger = structlog.get_logger()


def get_exam_service(repo: RepositoryDep) -> ExamService:
    """Get exam service instance."""
    return ExamService(repo)


@router.post(
    "/generate-exam-pdf",
    response_model=ExamDocumentResponse,
    status_code=status.HTTP_200_OK,
    tags=["Exams"],
    summary="Generate exam request document",
    responses={
        400: {"description": "Missing or malformed input"},
        404: {"description": "Patient or procedure not found"},
        500: {"description": "Unexpected failure"},
    },
)
async def generate_exam_pdf(
    service: Annotated[ExamService, Depends(get_exam_service)],
    payload: Annotated[Any, Body()] = None,
) -> ExamDocumentResponse | JSONResponse:
    """
    Resolve the exams a patient needs before a procedure and render the request.

    The body carries `cpf`, `procedure_id` and optionally `gender` and
    `conditions`. When `gender` is absent the patient's registered gender is
    used. Errors are answered as `{"error": message}`.

    Args:
        service: Exam service
        payload: Raw request body

    Returns:
        Rendered HTML, its base64 encoding and the resolved exam list
    """
    if payload is not None and not isinstance(payload, dict):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Request body must be a JSON object"},
        )

    try:
        request = ExamDocumentRequest.model_validate(payload or {})
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": f"Invalid {field}: {first['msg']}"},
        )

    try:
        return await service.generate_exam_document(request)
    except (BadRequestException, NotFoundException) as e:
        return JSONResponse(status_code=e.status_code, content={"error": e.message})
    except AppException as e:
        logger.error("exam_document_failed", error=e.message)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": e.message},
        )
    except Exception as e:
        logger.exception("exam_document_failed", error=str(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to generate exam document"},
        )
