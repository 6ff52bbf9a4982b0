"""Doctor model definition using SQLAlchemy Core."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Table, text
from sqlalchemy.dialects.postgresql import UUID

from app.models.base import metadata

doctors = Table(
    "doctors",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()")),
    Column("name", String(255), nullable=False, index=True),
    Column("specialty", String(100), nullable=False),
    # CRM registration number
    Column("professional_id", String(50), nullable=False, unique=True),
    Column("email", String(255)),
    Column("phone", String(20)),
    Column(
        "default_unit_id",
        UUID(as_uuid=True),
        ForeignKey("units.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("status", Boolean, nullable=False, server_default=text("true")),
    # Metadata
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
    Column("updated_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
)
