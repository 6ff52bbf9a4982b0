"""API v1 router configuration."""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    appointments,
    availabilities,
    calendar,
    doctors,
    exams,
    health,
    patients,
    procedures,
    units,
)

api_router = APIRouter()

# Include routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(calendar.router, prefix="/calendar", tags=["Calendar"])
api_router.include_router(units.router, prefix="/units", tags=["Units"])
api_router.include_router(doctors.router, prefix="/doctors", tags=["Doctors"])
api_router.include_router(patients.router, prefix="/patients", tags=["Patients"])
api_router.include_router(procedures.router, prefix="/procedures", tags=["Procedures"])
api_router.include_router(
    availabilities.router, prefix="/availabilities", tags=["Availabilities"]
)
api_router.include_router(appointments.router, prefix="/appointments", tags=["Appointments"])
api_router.include_router(exams.router, tags=["Exams"])
