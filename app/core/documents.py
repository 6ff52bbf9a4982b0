"""Printable HTML documents."""

import base64
from datetime import datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

env = Environment(
    loader=FileSystemLoader(searchpath=str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_exam_document(
    *,
    patient_name: str,
    patient_cpf: str | None,
    patient_age: int | None,
    patient_phone: str | None,
    procedure_name: str,
    exams: list[str],
    generated_at: datetime,
) -> str:
    """
    Render the exam request document for print or PDF conversion.

    Returns:
        Complete HTML document
    """
    template = env.get_template("exam_request.html")
    return template.render(
        patient_name=patient_name,
        patient_cpf=patient_cpf,
        patient_age=patient_age,
        patient_phone=patient_phone,
        procedure_name=procedure_name,
        exams=exams,
        generated_at=generated_at,
    )


def to_base64(html: str) -> str:
    """Encode a document as UTF-8 base64."""
    return base64.b64encode(html.encode("utf-8")).decode("ascii")
