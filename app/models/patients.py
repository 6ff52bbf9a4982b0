"""Patient model definition using SQLAlchemy Core."""

from sqlalchemy import Column, Date, DateTime, String, Table, Text, text
from sqlalchemy.dialects.postgresql import UUID

from app.models.base import metadata

patients = Table(
    "patients",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()")),
    Column("name", String(255), nullable=False, index=True),
    # Brazilian taxpayer id, used to look patients up from the exam request form
    Column("cpf", String(14), unique=True),
    Column("rg", String(20)),
    Column("birth_date", Date),
    Column("gender", String(10)),
    Column("phone", String(20)),
    Column("email", String(255)),
    Column("marital_status", String(30)),
    Column("occupation", String(100)),
    Column("insurance", String(100)),
    # Address information
    Column("address", Text),
    Column("address_number", String(20)),
    Column("neighborhood", String(100)),
    Column("city", String(100)),
    Column("state", String(2)),
    Column("zip_code", String(9)),
    Column("consultation_reason", Text),
    Column("notes", Text),
    # Metadata
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
    Column("updated_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
)
