"""Database models."""

from app.models.appointments import appointments
from app.models.availabilities import availabilities
from app.models.base import metadata
from app.models.doctors import doctors
from app.models.patients import patients
from app.models.procedures import procedures
from app.models.units import units

__all__ = [
    "appointments",
    "availabilities",
    "doctors",
    "metadata",
    "patients",
    "procedures",
    "units",
]
