"""Procedures table model using SQLAlchemy Core."""

from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String, Table, Text, text
from sqlalchemy.dialects.postgresql import JSONB, UUID

from app.models.base import metadata

procedures = Table(
    "procedures",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()")),
    Column("name", String(255), nullable=False, index=True),
    Column("description", Text),
    Column("duration_minutes", Integer),
    # Pricing
    Column("price_cash", Numeric(10, 2)),
    Column("price_card", Numeric(10, 2)),
    Column("max_installments", Integer),
    # Exam requirement rules
    Column("exam_requirements", JSONB, nullable=False, server_default=text("'[]'::jsonb")),
    # Example: [{"id": "...", "gender": "female", "age_min": 18, "age_max": null,
    #            "conditions": ["sexual_activity"], "exams": ["Pap smear"]}]
    Column("status", Boolean, nullable=False, server_default=text("true")),
    # Metadata
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
    Column("updated_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
)
