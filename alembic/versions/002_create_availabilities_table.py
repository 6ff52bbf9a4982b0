"""Create availabilities table

Revision ID: 002
Revises: 001
Create Date: 2026-10-05

"""

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision = "002"
down_revision = "001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create availabilities table with one general record per unit and date."""
    op.create_table(
        "availabilities",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("unit_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("availability_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column(
            "is_procedure_day", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        sa.Column("procedure_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["unit_id"], ["units.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["procedure_id"], ["procedures.id"], ondelete="CASCADE"),
        sa.CheckConstraint("end_time > start_time", name="availabilities_time_window_check"),
    )

    op.create_index(
        "idx_availabilities_unit_date", "availabilities", ["unit_id", "availability_date"]
    )
    op.create_index(
        "uq_availabilities_general_per_date",
        "availabilities",
        ["unit_id", "availability_date"],
        unique=True,
        postgresql_where=sa.text("procedure_id IS NULL"),
    )
    op.create_index(
        "uq_availabilities_procedure_per_date",
        "availabilities",
        ["unit_id", "availability_date", "procedure_id"],
        unique=True,
        postgresql_where=sa.text("procedure_id IS NOT NULL"),
    )


def downgrade() -> None:
    """Drop availabilities table."""
    op.drop_index("uq_availabilities_procedure_per_date", table_name="availabilities")
    op.drop_index("uq_availabilities_general_per_date", table_name="availabilities")
    op.drop_index("idx_availabilities_unit_date", table_name="availabilities")
    op.drop_table("availabilities")
