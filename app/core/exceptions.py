"""Custom application exceptions."""

from datetime import time


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500):
        """Initialize exception with message and status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundException(AppException):
    """Resource not found exception."""

    def __init__(self, message: str = "Resource not found"):
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404)


class BadRequestException(AppException):
    """Bad request exception."""

    def __init__(self, message: str = "Bad request"):
        """Initialize with 400 status code."""
        super().__init__(message, status_code=400)


class ConflictException(AppException):
    """Conflict exception."""

    def __init__(self, message: str = "Conflict"):
        """Initialize with 409 status code."""
        super().__init__(message, status_code=409)


class BookingConflictException(ConflictException):
    """An appointment overlaps an existing one in the same unit and day."""

    def __init__(self, conflict_start: time, conflict_end: time):
        """Initialize with the bounds of the overlapping appointment."""
        self.conflict_start = conflict_start
        self.conflict_end = conflict_end
        super().__init__(
            f"An appointment is already booked between "
            f"{conflict_start.strftime('%H:%M')} and {conflict_end.strftime('%H:%M')}"
        )


class ValidationException(AppException):
    """Validation error exception."""

    def __init__(self, message: str = "Validation error"):
        """Initialize with 422 status code."""
        super().__init__(message, status_code=422)


class PersistenceException(AppException):
    """The underlying data store rejected or failed an operation."""

    def __init__(self, message: str = "Data store operation failed", detail: str | None = None):
        """Initialize with 503 status code and the driver's error text."""
        self.detail = detail or ""
        super().__init__(message, status_code=503)

    def violates(self, constraint: str) -> bool:
        """Check whether the failure was raised by the named constraint."""
        return constraint in self.detail
