"""
Core module for application configuration, logging, and shared infrastructure.

This module provides:
- Settings: Application configuration via pydantic-settings
- Dependency injection: FastAPI Depends() functions for services and repositories
- Exceptions: Domain-specific exception classes with HTTP status codes
- Datetime utilities: UTC-first timestamps
"""
from core.config import settings, Settings

# Dependency injection - import functions for FastAPI Depends()
from core.dependencies import (
    init_database,
    get_database,
    close_database,
    get_user_repository,
    get_patient_repository,
    get_account_service,
    get_patient_service,
)

# Exception classes for consistent error handling
from core.exceptions import (
    ClinicServiceError,
    ValidationError,
    MissingFieldsError,
    PasswordMismatchError,
    ConflictError,
    AuthenticationError,
    NotFoundError,
    PatientNotFoundError,
    UserNotFoundError,
    StorageError,
    StorageUnavailableError,
    setup_exception_handlers,
)

from core.datetime_utils import utc_now, format_iso, utc_timestamp

__all__ = [
    "settings",
    "Settings",
    "init_database",
    "get_database",
    "close_database",
    "get_user_repository",
    "get_patient_repository",
    "get_account_service",
    "get_patient_service",
    "ClinicServiceError",
    "ValidationError",
    "MissingFieldsError",
    "PasswordMismatchError",
    "ConflictError",
    "AuthenticationError",
    "NotFoundError",
    "PatientNotFoundError",
    "UserNotFoundError",
    "StorageError",
    "StorageUnavailableError",
    "setup_exception_handlers",
    "utc_now",
    "format_iso",
    "utc_timestamp",
]
