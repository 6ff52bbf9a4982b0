"""Availabilities table model using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Table,
    Time,
    text,
)
from sqlalchemy.dialects.postgresql import UUID

from app.models.base import metadata

availabilities = Table(
    "availabilities",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()")),
    Column(
        "unit_id",
        UUID(as_uuid=True),
        ForeignKey("units.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("availability_date", Date, nullable=False),
    Column("start_time", Time, nullable=False),
    Column("end_time", Time, nullable=False),
    Column("is_procedure_day", Boolean, nullable=False, server_default=text("false")),
    # NULL means general attendance
    Column(
        "procedure_id",
        UUID(as_uuid=True),
        ForeignKey("procedures.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
    CheckConstraint("end_time > start_time", name="availabilities_time_window_check"),
)

Index("idx_availabilities_unit_date", availabilities.c.unit_id, availabilities.c.availability_date)
# At most one general record per unit and date
Index(
    "uq_availabilities_general_per_date",
    availabilities.c.unit_id,
    availabilities.c.availability_date,
    unique=True,
    postgresql_where=availabilities.c.procedure_id.is_(None),
)
Index(
    "uq_availabilities_procedure_per_date",
    availabilities.c.unit_id,
    availabilities.c.availability_date,
    availabilities.c.procedure_id,
    unique=True,
    postgresql_where=availabilities.c.procedure_id.isnot(None),
)
