"""
Shared exception classes and error handling utilities for the Clinic Service API.

This module provides:
- Custom exception hierarchy for domain-specific errors
- Consistent error response formatting (every body carries a ``message``)
- Exception handlers for FastAPI integration

Usage:
    from core.exceptions import PatientNotFoundError, ValidationError

    # In service layer - raise domain exceptions
    raise PatientNotFoundError(patient_id="0f3c...")

    # In FastAPI - register handlers via setup_exception_handlers(app)
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# =============================================================================
# BASE EXCEPTION CLASS
# =============================================================================

class ClinicServiceError(Exception):
    """
    Base exception for all Clinic Service domain errors.

    All custom exceptions inherit from this class. Each carries an HTTP status
    code, a human-readable message and optional context. Context is only
    returned to the client for 4xx errors; 5xx context stays in the logs.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "An unexpected error occurred."

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs: Any
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message. Uses class default if not provided.
            status_code: HTTP status code. Uses class default if not provided.
            **kwargs: Additional context about the failure.
        """
        self.message = message or self.__class__.message
        self.status_code = status_code or self.__class__.status_code
        self.context = {key: value for key, value in kwargs.items() if value is not None}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        result: Dict[str, Any] = {"message": self.message}
        if self.context and self.status_code < 500:
            result["context"] = self.context
        return result


# =============================================================================
# REQUEST EXCEPTIONS
# =============================================================================

class ValidationError(ClinicServiceError):
    """Raised when required input is missing or invalid."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request."


class MissingFieldsError(ValidationError):
    """Raised when one or more required fields are absent or empty."""

    message = "All fields are required."

    def __init__(self, missing_fields: List[str], message: Optional[str] = None, **kwargs: Any):
        self.missing_fields = list(missing_fields)
        super().__init__(message=message, missing_fields=self.missing_fields, **kwargs)


class PasswordMismatchError(ValidationError):
    """Raised when password and confirmPassword differ at registration."""

    message = "Passwords do not match."


# =============================================================================
# ACCOUNT EXCEPTIONS
# =============================================================================

class ConflictError(ClinicServiceError):
    """Raised when a unique field (email or username) is already taken."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Email or username is already in use."


class AuthenticationError(ClinicServiceError):
    """Raised when the supplied password does not match the stored hash."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Incorrect password."


# =============================================================================
# LOOKUP EXCEPTIONS
# =============================================================================

class NotFoundError(ClinicServiceError):
    """Raised when no record matches the requested identifier."""

    status_code = status.HTTP_404_NOT_FOUND
    message = "Record not found."


class PatientNotFoundError(NotFoundError):
    """Raised when a patient is not found in the database."""

    message = "Patient not found."

    def __init__(self, patient_id: Optional[str] = None, **kwargs: Any):
        super().__init__(patient_id=patient_id, **kwargs)


class UserNotFoundError(NotFoundError):
    """
    Raised when login is attempted for an unknown email.

    Login failures of every kind are reported as 400 to the client.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    message = "User not found."


# =============================================================================
# STORAGE EXCEPTIONS
# =============================================================================

class StorageError(ClinicServiceError):
    """Raised when a database operation fails."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server error."

    def __init__(self, operation: Optional[str] = None, **kwargs: Any):
        super().__init__(operation=operation, **kwargs)


class StorageUnavailableError(StorageError):
    """Raised when the database is closed or cannot be reached."""


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

async def clinic_service_exception_handler(
    request: Request,
    exc: ClinicServiceError
) -> JSONResponse:
    """
    Handle ClinicServiceError exceptions and return consistent JSON responses.
    """
    log_level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(
        log_level,
        f"{exc.__class__.__name__}: {exc.message}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "method": request.method,
            "context": exc.context
        }
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def request_validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Report malformed bodies (non-JSON, wrong field types) as 400 ValidationError.

    FastAPI would answer 422 by default; clients of this API expect 400 with
    a ``message`` field for every input problem.
    """
    fields = [
        ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        for error in exc.errors()
    ]
    error = ValidationError(
        message="Invalid request body.",
        fields=[field for field in fields if field] or None
    )
    return await clinic_service_exception_handler(request, error)


async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions with a generic error response.

    Logs the full exception for debugging but returns a safe error message.
    """
    logger.exception(
        f"Unhandled exception: {exc}",
        extra={
            "path": request.url.path,
            "method": request.method
        }
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": StorageError.message}
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Call this function during app initialization to enable consistent
    error handling across all endpoints.

    Example:
        app = FastAPI()
        setup_exception_handlers(app)
    """
    app.add_exception_handler(ClinicServiceError, clinic_service_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
