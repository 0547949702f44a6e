"""
Repository layer for database access.

This module contains all database access operations, encapsulating SQL and data persistence logic.
"""
from repositories.base import Database
from repositories.patient_repository import PatientRepository, PATIENT_FIELDS
from repositories.user_repository import UserRepository

__all__ = [
    "Database",
    "PatientRepository",
    "PATIENT_FIELDS",
    "UserRepository",
]
