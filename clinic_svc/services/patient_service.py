"""
Service layer for patient operations.

This service contains business logic for the patient directory
and orchestrates calls to repositories.

Architecture:
    API Layer (routers) → PatientService → PatientRepository → Database

Dependency Injection:
    PatientService receives its repository via constructor injection.
    Use core.dependencies.get_patient_service() in routers with Depends().
"""
import logging
import re
from typing import List

from repositories import PatientRepository
from schemas import PatientFields, PatientResponse
from core.exceptions import PatientNotFoundError
from services.validators import validate_required_fields

logger = logging.getLogger(__name__)

# Wire names of the fields required on create and on update
PATIENT_REQUIRED_FIELDS = (
    "name",
    "age",
    "gender",
    "disease",
    "antecedent",
    "diagnostic",
    "medicaments",
    "planTraitement",
    "dateVaccination",
    "allergies",
    "resultatsTest",
)

PATIENT_ID_PATTERN = re.compile(r"[0-9a-f]{32}")


def is_valid_patient_id(patient_id: str) -> bool:
    """Identifiers are 32 lowercase hex characters."""
    return PATIENT_ID_PATTERN.fullmatch(patient_id) is not None


class PatientService:
    """
    Service layer for patient operations.

    Create and update apply the same presence rule; an identifier that
    cannot exist is reported as not found without touching storage.
    """

    def __init__(self, patient_repository: PatientRepository):
        """
        Initialize the patient service.

        Args:
            patient_repository: PatientRepository instance for data access.
                               Injected via core.dependencies.get_patient_service().
        """
        self._repo = patient_repository

    @staticmethod
    def _validate(fields: PatientFields) -> None:
        validate_required_fields(fields.model_dump(by_alias=True), PATIENT_REQUIRED_FIELDS)

    def add_patient(self, fields: PatientFields) -> PatientResponse:
        """
        Add a new patient.

        Returns:
            PatientResponse: The created patient, including its generated id.

        Raises:
            MissingFieldsError: If any required field is absent or empty.
        """
        self._validate(fields)

        created = self._repo.add(fields.model_dump())
        logger.info("Patient created", extra={"patient_id": created["id"]})
        return PatientResponse(**created)

    def get_patients(self) -> List[PatientResponse]:
        """
        Get all patients.

        Returns:
            List of PatientResponse objects in insertion order.
        """
        return [PatientResponse(**p) for p in self._repo.get_all()]

    def get_patient(self, patient_id: str) -> PatientResponse:
        """
        Get a patient by identifier.

        Raises:
            PatientNotFoundError: If no patient has this identifier.
        """
        if not is_valid_patient_id(patient_id):
            raise PatientNotFoundError(patient_id=patient_id)

        patient = self._repo.get_by_id(patient_id)
        if patient is None:
            raise PatientNotFoundError(patient_id=patient_id)

        return PatientResponse(**patient)

    def update_patient(self, patient_id: str, fields: PatientFields) -> PatientResponse:
        """
        Replace every clinical field of a patient.

        Returns:
            PatientResponse: The patient as stored after the update.

        Raises:
            MissingFieldsError: If any required field is absent or empty.
            PatientNotFoundError: If no patient has this identifier.
        """
        self._validate(fields)

        if not is_valid_patient_id(patient_id):
            raise PatientNotFoundError(patient_id=patient_id)

        updated = self._repo.replace(patient_id, fields.model_dump())
        if updated is None:
            raise PatientNotFoundError(patient_id=patient_id)

        logger.info("Patient updated", extra={"patient_id": patient_id})
        return PatientResponse(**updated)

    def delete_patient(self, patient_id: str) -> None:
        """
        Permanently delete a patient.

        Raises:
            PatientNotFoundError: If no patient has this identifier.
        """
        if not is_valid_patient_id(patient_id) or not self._repo.delete(patient_id):
            raise PatientNotFoundError(patient_id=patient_id)

        logger.info("Patient deleted", extra={"patient_id": patient_id})
