"""Appointments table model using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Numeric,
    Table,
    Text,
    Time,
    text,
)
from sqlalchemy.dialects.postgresql import UUID

from app.models.base import metadata

# Name of the exclusion constraint created by migration 003
APPOINTMENT_OVERLAP_CONSTRAINT = "appointments_no_overlap"

appointments = Table(
    "appointments",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()")),
    # References
    Column("patient_id", UUID(as_uuid=True), ForeignKey("patients.id", ondelete="CASCADE")),
    Column("doctor_id", UUID(as_uuid=True), ForeignKey("doctors.id", ondelete="SET NULL")),
    Column(
        "unit_id",
        UUID(as_uuid=True),
        ForeignKey("units.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("procedure_id", UUID(as_uuid=True), ForeignKey("procedures.id", ondelete="SET NULL")),
    # Appointment window
    Column("appointment_date", Date, nullable=False),
    Column("start_time", Time, nullable=False),
    Column("end_time", Time, nullable=False),
    Column("is_procedure", Boolean, nullable=False, server_default=text("false")),
    # Status management
    Column("status", Text, nullable=False, server_default="scheduled"),
    Column("notes", Text, nullable=True),
    Column("amount_paid", Numeric(10, 2), nullable=True),
    # Audit fields
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
    Column("updated_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
    # Constraints
    CheckConstraint(
        "status IN ('scheduled', 'confirmed', 'completed', 'cancelled', 'no_show')",
        name="appointments_status_check",
    ),
    CheckConstraint("end_time > start_time", name="appointments_time_window_check"),
)

Index("idx_appointments_unit_date", appointments.c.unit_id, appointments.c.appointment_date)
Index("idx_appointments_date", appointments.c.appointment_date)
