"""Create units, doctors, patients and procedures tables

Revision ID: 001
Revises:
Create Date: 2026-10-05

"""

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def _uuid_pk() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=True),
        server_default=sa.text("gen_random_uuid()"),
        nullable=False,
    )


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create registry tables."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    op.create_table(
        "units",
        _uuid_pk(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("city", sa.String(length=100), nullable=True),
        sa.Column("state", sa.String(length=2), nullable=True),
        sa.Column("zip_code", sa.String(length=9), nullable=True),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.Column("cnpj", sa.String(length=18), nullable=True),
        sa.Column("status", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("cnpj", name="units_cnpj_key"),
    )
    op.create_index("ix_units_name", "units", ["name"])

    op.create_table(
        "doctors",
        _uuid_pk(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("specialty", sa.String(length=100), nullable=False),
        sa.Column("professional_id", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.Column("default_unit_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("status", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("professional_id", name="doctors_professional_id_key"),
        sa.ForeignKeyConstraint(["default_unit_id"], ["units.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_doctors_name", "doctors", ["name"])

    op.create_table(
        "patients",
        _uuid_pk(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("cpf", sa.String(length=14), nullable=True),
        sa.Column("rg", sa.String(length=20), nullable=True),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("gender", sa.String(length=10), nullable=True),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("marital_status", sa.String(length=30), nullable=True),
        sa.Column("occupation", sa.String(length=100), nullable=True),
        sa.Column("insurance", sa.String(length=100), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("address_number", sa.String(length=20), nullable=True),
        sa.Column("neighborhood", sa.String(length=100), nullable=True),
        sa.Column("city", sa.String(length=100), nullable=True),
        sa.Column("state", sa.String(length=2), nullable=True),
        sa.Column("zip_code", sa.String(length=9), nullable=True),
        sa.Column("consultation_reason", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("cpf", name="patients_cpf_key"),
    )
    op.create_index("ix_patients_name", "patients", ["name"])

    op.create_table(
        "procedures",
        _uuid_pk(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("duration_minutes", sa.Integer(), nullable=True),
        sa.Column("price_cash", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("price_card", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("max_installments", sa.Integer(), nullable=True),
        sa.Column(
            "exam_requirements",
            postgresql.JSONB(astext_type=sa.Text()),
            server_default=sa.text("'[]'::jsonb"),
            nullable=False,
        ),
        sa.Column("status", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_procedures_name", "procedures", ["name"])


def downgrade() -> None:
    """Drop registry tables."""
    op.drop_index("ix_procedures_name", table_name="procedures")
    op.drop_table("procedures")
    op.drop_index("ix_patients_name", table_name="patients")
    op.drop_table("patients")
    op.drop_index("ix_doctors_name", table_name="doctors")
    op.drop_table("doctors")
    op.drop_index("ix_units_name", table_name="units")
    op.drop_table("units")
