"""
Pydantic schemas for API request/response validation.

This module contains all Pydantic models used at API boundaries.
"""
from schemas.patient import PatientFields, PatientResponse, PatientMessageResponse
from schemas.user import (
    RegisterRequest,
    LoginRequest,
    UserResponse,
    LoginResponse,
    MessageResponse,
)

__all__ = [
    # Patient schemas
    "PatientFields",
    "PatientResponse",
    "PatientMessageResponse",
    # Account schemas
    "RegisterRequest",
    "LoginRequest",
    "UserResponse",
    "LoginResponse",
    "MessageResponse",
]
