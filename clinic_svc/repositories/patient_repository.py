"""
Repository for patient database operations.

This module contains all database access for patient-related operations.

Architecture:
    PatientRepository is the data access layer for patients.
    It should be injected via core.dependencies.get_patient_repository().

All SQL is encapsulated in this repository - no SQL in service or API layers.
"""
import sqlite3
import logging
import uuid
from typing import Optional, List, Dict, Any

from repositories.base import Database
from core.datetime_utils import utc_timestamp

logger = logging.getLogger(__name__)

# Clinical fields, in column order
PATIENT_FIELDS = (
    "name",
    "age",
    "gender",
    "disease",
    "antecedent",
    "diagnostic",
    "medicaments",
    "plan_traitement",
    "date_vaccination",
    "allergies",
    "resultats_test",
)

PATIENT_COLUMNS = ", ".join(("id",) + PATIENT_FIELDS + ("created_at", "updated_at"))


class PatientRepository:
    """
    Repository for patient CRUD operations.

    Fields are passed as dicts keyed by the names in PATIENT_FIELDS; keys
    that are missing are stored as NULL.
    """

    def __init__(self, db: Database):
        """
        Initialize the patient repository.

        Args:
            db: Database instance for data access.
                Injected via core.dependencies.get_patient_repository().
        """
        self._db = db

    @staticmethod
    def _row_to_dict(row: sqlite3.Row) -> Dict[str, Any]:
        return {key: row[key] for key in row.keys()}

    @staticmethod
    def _values(fields: Dict[str, Any]) -> tuple:
        return tuple(fields.get(name) for name in PATIENT_FIELDS)

    def _select_by_id(self, conn: sqlite3.Connection, patient_id: str) -> Optional[sqlite3.Row]:
        return conn.execute(
            f"SELECT {PATIENT_COLUMNS} FROM patients WHERE id = ?", (patient_id,)
        ).fetchone()

    def add(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        Add a new patient and return the created record.

        The identifier is generated here; insert and read-back share one
        transaction.

        Args:
            fields: Clinical field values keyed by PATIENT_FIELDS names.

        Returns:
            Dict[str, Any]: The created patient including id and timestamps.
        """
        patient_id = uuid.uuid4().hex
        now = utc_timestamp()
        placeholders = ", ".join("?" for _ in range(len(PATIENT_FIELDS) + 3))

        with self._db.transaction("add_patient") as conn:
            conn.execute(
                f"INSERT INTO patients ({PATIENT_COLUMNS}) VALUES ({placeholders})",
                (patient_id,) + self._values(fields) + (now, now)
            )
            row = self._select_by_id(conn, patient_id)

        return self._row_to_dict(row)

    def get_all(self) -> List[Dict[str, Any]]:
        """
        Get all patients in insertion order.

        Returns:
            List[dict]: Every stored patient.
        """
        with self._db.transaction("list_patients") as conn:
            rows = conn.execute(
                f"SELECT {PATIENT_COLUMNS} FROM patients ORDER BY rowid ASC"
            ).fetchall()

        return [self._row_to_dict(row) for row in rows]

    def get_by_id(self, patient_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a patient by identifier.

        Returns:
            Optional[dict]: Patient dictionary or None if not found.
        """
        with self._db.transaction("get_patient") as conn:
            row = self._select_by_id(conn, patient_id)

        return self._row_to_dict(row) if row else None

    def replace(self, patient_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Overwrite every clinical field of a patient.

        Fields absent from ``fields`` become NULL (full replace, not merge).

        Returns:
            Optional[dict]: The updated patient, or None if no patient has this id.
        """
        assignments = ", ".join(f"{name} = ?" for name in PATIENT_FIELDS)

        with self._db.transaction("replace_patient") as conn:
            cursor = conn.execute(
                f"UPDATE patients SET {assignments}, updated_at = ? WHERE id = ?",
                self._values(fields) + (utc_timestamp(), patient_id)
            )
            if cursor.rowcount == 0:
                return None
            row = self._select_by_id(conn, patient_id)

        return self._row_to_dict(row)

    def delete(self, patient_id: str) -> bool:
        """
        Permanently delete a patient.

        Returns:
            bool: True if a patient was deleted, False if none matched.
        """
        with self._db.transaction("delete_patient") as conn:
            cursor = conn.execute("DELETE FROM patients WHERE id = ?", (patient_id,))
            deleted = cursor.rowcount > 0

        return deleted
