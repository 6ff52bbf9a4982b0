"""Units table model using SQLAlchemy Core."""

from sqlalchemy import Boolean, Column, DateTime, String, Table, Text, text
from sqlalchemy.dialects.postgresql import UUID

from app.models.base import metadata

units = Table(
    "units",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()")),
    Column("name", String(255), nullable=False, index=True),
    Column("address", Text, nullable=False),
    Column("city", String(100)),
    Column("state", String(2)),
    Column("zip_code", String(9)),
    Column("phone", String(20)),
    Column("cnpj", String(18), unique=True),
    Column("status", Boolean, nullable=False, server_default=text("true")),
    # Metadata
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
    Column("updated_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
)
