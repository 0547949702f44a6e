"""
Patients router - patient directory endpoints.

This router handles patient CRUD operations via RESTful endpoints.

Architecture:
    HTTP Request → Router (this file) → PatientService → PatientRepository → Database

Dependency Injection:
    Services are injected via FastAPI's Depends() mechanism.
    The DI chain is defined in core/dependencies.py.
"""
import logging
from fastapi import APIRouter, Depends, status
from typing import List

from schemas import PatientFields, PatientResponse, PatientMessageResponse, MessageResponse
from services import PatientService
from core.dependencies import get_patient_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/patients",
    tags=["Patients"],
)


# Note: Services are injected via Depends(). Domain exceptions raised by the
# service are turned into responses by setup_exception_handlers().

@router.post(
    "",
    response_model=PatientMessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new patient",
    description="Add a patient. All eleven clinical fields are required."
)
async def create_patient(
    patient: PatientFields,
    patient_service: PatientService = Depends(get_patient_service)
):
    """
    Create a new patient.

    Returns the created patient with its generated id.
    Raises 400 if a required field is missing.
    """
    created = patient_service.add_patient(patient)
    return PatientMessageResponse(message="Patient added successfully.", patient=created)


@router.get(
    "",
    response_model=List[PatientResponse],
    summary="List all patients",
    description="Retrieve every patient, in the order they were added. No filtering or pagination."
)
async def list_patients(
    patient_service: PatientService = Depends(get_patient_service)
):
    """Get all patients."""
    return patient_service.get_patients()


@router.get(
    "/{patient_id}",
    response_model=PatientMessageResponse,
    summary="Get a patient",
    description="Fetch a single patient by id. Returns 404 if no patient matches."
)
async def get_patient(
    patient_id: str,
    patient_service: PatientService = Depends(get_patient_service)
):
    """Get a patient by id."""
    patient = patient_service.get_patient(patient_id)
    return PatientMessageResponse(message="Patient found.", patient=patient)


@router.put(
    "/{patient_id}",
    response_model=PatientMessageResponse,
    summary="Replace a patient",
    description="Overwrite every clinical field of a patient. All fields are required."
)
async def update_patient(
    patient_id: str,
    patient: PatientFields,
    patient_service: PatientService = Depends(get_patient_service)
):
    """
    Replace a patient (full replace, not a partial patch).

    Raises 400 if a required field is missing, 404 if no patient matches.
    """
    updated = patient_service.update_patient(patient_id, patient)
    return PatientMessageResponse(message="Patient updated successfully.", patient=updated)


@router.delete(
    "/{patient_id}",
    response_model=MessageResponse,
    summary="Delete a patient",
    description="Permanently remove a patient. Returns 404 if no patient matches."
)
async def delete_patient(
    patient_id: str,
    patient_service: PatientService = Depends(get_patient_service)
):
    """Delete a patient."""
    patient_service.delete_patient(patient_id)
    return MessageResponse(message="Patient deleted successfully.")
