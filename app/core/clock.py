"""Clinic-local time."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from app.config import settings


def clinic_now() -> datetime:
    """Current time in the clinic's timezone."""
    return datetime.now(ZoneInfo(settings.clinic_timezone))


def clinic_today() -> date:
    """Current date in the clinic's timezone."""
    return clinic_now().date()
