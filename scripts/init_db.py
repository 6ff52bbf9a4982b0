"""Script to initialize the database without running migrations.

Creates every table from the model metadata, then adds the appointment
overlap exclusion that metadata cannot express.
"""

import asyncio

from sqlalchemy import text

from app.database import engine
from app.models import metadata
from app.models.appointments import APPOINTMENT_OVERLAP_CONSTRAINT

OVERLAP_EXCLUSION = f"""
ALTER TABLE appointments
ADD CONSTRAINT {APPOINTMENT_OVERLAP_CONSTRAINT}
EXCLUDE USING gist (
    unit_id WITH =,
    tsrange(appointment_date + start_time, appointment_date + end_time, '[)') WITH &&
)
"""


async def init_db() -> None:
    """Initialize the database by creating all tables."""
    async with engine.begin() as conn:
        await conn.execute(text('CREATE EXTENSION IF NOT EXISTS "pgcrypto"'))
        await conn.execute(text("CREATE EXTENSION IF NOT EXISTS btree_gist"))

        await conn.run_sync(metadata.create_all)

        exists = await conn.scalar(
            text("SELECT 1 FROM pg_constraint WHERE conname = :name"),
            {"name": APPOINTMENT_OVERLAP_CONSTRAINT},
        )
        if not exists:
            await conn.execute(text(OVERLAP_EXCLUSION))

    await engine.dispose()
    print("✓ Database initialized successfully!")


if __name__ == "__main__":
    asyncio.run(init_db())
