"""
Validation utilities for services.
"""
from services.validators.presence_validator import (
    is_present,
    find_missing_fields,
    validate_required_fields,
)

__all__ = [
    "is_present",
    "find_missing_fields",
    "validate_required_fields",
]
