"""
Pydantic schemas for patient-related API operations.

Field names follow the wire format used by the front-end (camelCase for
multi-word fields); Python code uses snake_case attribute names.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Largest value an SQLite INTEGER column can hold
SQLITE_MAX_INTEGER = 2**63 - 1


class PatientFields(BaseModel):
    """Clinical fields accepted when creating or replacing a patient.

    Every field is optional at the schema level: presence is checked by the
    service so that missing fields are reported as a 400 with the list of
    missing names, rather than as a framework validation error.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "Jo",
                "age": 40,
                "gender": "M",
                "disease": "flu",
                "antecedent": "none",
                "diagnostic": "flu",
                "medicaments": "none",
                "planTraitement": "rest",
                "dateVaccination": "2023-01-01",
                "allergies": "none",
                "resultatsTest": "negative"
            }
        },
    )

    name: Optional[str] = Field(None, description="Patient full name")
    age: Optional[int] = Field(
        None, ge=0, le=SQLITE_MAX_INTEGER, description="Age in years (0 is a valid age)"
    )
    gender: Optional[str] = Field(None, description="Gender")
    disease: Optional[str] = Field(None, description="Current disease")
    antecedent: Optional[str] = Field(None, description="Medical history")
    diagnostic: Optional[str] = Field(None, description="Diagnosis")
    medicaments: Optional[str] = Field(None, description="Current medication")
    plan_traitement: Optional[str] = Field(None, alias="planTraitement", description="Treatment plan")
    date_vaccination: Optional[str] = Field(None, alias="dateVaccination", description="Vaccination date, e.g. 2023-01-01")
    allergies: Optional[str] = Field(None, description="Known allergies")
    resultats_test: Optional[str] = Field(None, alias="resultatsTest", description="Test results")

    @field_validator("age", mode="before")
    @classmethod
    def reject_boolean_age(cls, value):
        """JSON true/false would otherwise be coerced to 1/0."""
        if isinstance(value, bool):
            raise ValueError("age must be a number, not a boolean")
        return value


class PatientResponse(PatientFields):
    """Schema for a stored patient: clinical fields plus identifier and timestamps."""
    id: str = Field(..., description="Unique patient identifier (32 hex characters)")
    created_at: str = Field(..., alias="createdAt", description="UTC ISO 8601 creation time")
    updated_at: str = Field(..., alias="updatedAt", description="UTC ISO 8601 time of the last update")


class PatientMessageResponse(BaseModel):
    """Acknowledgment carrying the affected patient."""
    message: str
    patient: PatientResponse
