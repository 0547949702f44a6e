"""
Service layer for business logic.

This module contains all business logic and orchestration services.
"""
from services.account_service import AccountService
from services.patient_service import PatientService

__all__ = [
    "AccountService",
    "PatientService",
]
