"""
Tests for the repository layer and the database lifecycle.
"""
import pytest

from core.exceptions import StorageError, StorageUnavailableError
from repositories import PATIENT_FIELDS


def _fields(**overrides):
    fields = {name: f"{name}-value" for name in PATIENT_FIELDS}
    fields["age"] = 30
    fields.update(overrides)
    return fields


# =============================================================================
# DATABASE LIFECYCLE
# =============================================================================

class TestDatabase:

    def test_ping_on_open_database(self, temp_db):
        temp_db.ping()
        assert temp_db.is_closed is False

    def test_closed_database_refuses_connections(self, temp_db):
        temp_db.close()
        assert temp_db.is_closed is True
        with pytest.raises(StorageUnavailableError):
            temp_db.get_connection()

    def test_ping_on_closed_database_raises_storage_error(self, temp_db):
        temp_db.close()
        with pytest.raises(StorageError):
            temp_db.ping()

    def test_close_is_idempotent(self, temp_db):
        temp_db.close()
        temp_db.close()

    def test_unexpected_sqlite_error_becomes_storage_error(self, temp_db):
        with pytest.raises(StorageError) as exc_info:
            with temp_db.transaction("broken_query") as conn:
                conn.execute("SELECT * FROM no_such_table")
        assert exc_info.value.context["operation"] == "broken_query"
        assert exc_info.value.status_code == 500


# =============================================================================
# USERS
# =============================================================================

class TestUserRepository:

    def test_add_and_get_by_email(self, user_repo):
        created = user_repo.add("Ana", "ana1", "ana@x.com", "hash")

        assert created["username"] == "ana1"
        assert user_repo.get_by_email("ana@x.com") == created

    def test_get_by_email_unknown(self, user_repo):
        assert user_repo.get_by_email("nobody@x.com") is None

    def test_duplicate_email_rejected_by_constraint(self, user_repo):
        user_repo.add("Ana", "ana1", "ana@x.com", "hash")
        assert user_repo.add("Other", "ana2", "ana@x.com", "hash") is None

    def test_duplicate_username_rejected_by_constraint(self, user_repo):
        user_repo.add("Ana", "ana1", "ana@x.com", "hash")
        assert user_repo.add("Other", "ana1", "other@x.com", "hash") is None

    def test_exists_with_email_or_username(self, user_repo):
        user_repo.add("Ana", "ana1", "ana@x.com", "hash")

        assert user_repo.exists_with_email_or_username("ana@x.com", "new") is True
        assert user_repo.exists_with_email_or_username("new@x.com", "ana1") is True
        assert user_repo.exists_with_email_or_username("new@x.com", "new") is False

    def test_closed_database_raises(self, temp_db, user_repo):
        temp_db.close()
        with pytest.raises(StorageUnavailableError):
            user_repo.get_by_email("ana@x.com")


# =============================================================================
# PATIENTS
# =============================================================================

class TestPatientRepository:

    def test_add_generates_id_and_timestamps(self, patient_repo):
        created = patient_repo.add(_fields())

        assert len(created["id"]) == 32
        assert created["created_at"] == created["updated_at"]
        assert created["plan_traitement"] == "plan_traitement-value"

    def test_ids_are_unique(self, patient_repo):
        ids = {patient_repo.add(_fields())["id"] for _ in range(5)}
        assert len(ids) == 5

    def test_get_all_preserves_insertion_order(self, patient_repo):
        for name in ("c", "a", "b"):
            patient_repo.add(_fields(name=name))

        assert [p["name"] for p in patient_repo.get_all()] == ["c", "a", "b"]

    def test_get_by_id_unknown(self, patient_repo):
        assert patient_repo.get_by_id("0" * 32) is None

    def test_replace_overwrites_every_field(self, patient_repo):
        created = patient_repo.add(_fields())

        updated = patient_repo.replace(created["id"], {"name": "New", "age": 0})

        assert updated["name"] == "New"
        assert updated["age"] == 0
        # Fields not supplied are cleared, not kept
        assert updated["disease"] is None
        assert updated["created_at"] == created["created_at"]

    def test_replace_unknown_returns_none(self, patient_repo):
        assert patient_repo.replace("0" * 32, _fields()) is None

    def test_delete(self, patient_repo):
        created = patient_repo.add(_fields())

        assert patient_repo.delete(created["id"]) is True
        assert patient_repo.get_by_id(created["id"]) is None
        assert patient_repo.delete(created["id"]) is False
