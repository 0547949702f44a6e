"""
Shared pytest fixtures for the Clinic Service API tests.

Key patterns:

1. Database Isolation: Each test gets a fresh temporary database
2. DI Override: Use app.dependency_overrides to inject test dependencies
3. Service Injection: Services are created with test repositories

Fixture Hierarchy:
    temp_db → repositories → services → test_app → client
"""
import os
import tempfile
import pytest
from fastapi.testclient import TestClient
from fastapi import FastAPI

# Configure the service before importing config modules.
# The lowest bcrypt cost keeps hashing fast in tests.
os.environ.setdefault("CLINIC_SVC_BCRYPT_ROUNDS", "4")
os.environ.setdefault("CLINIC_SVC_DB_DIR", tempfile.mkdtemp(prefix="clinic_svc_test_"))

from repositories import Database, PatientRepository, UserRepository
from services import AccountService, PatientService
from core.exceptions import setup_exception_handlers
from core import dependencies as deps

TEST_BCRYPT_ROUNDS = 4


@pytest.fixture
def patient_payload():
    """A complete, valid patient body."""
    return {
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
        "resultatsTest": "negative",
    }


@pytest.fixture
def registration_payload():
    """A complete, valid registration body."""
    return {
        "firstName": "Ana",
        "username": "ana1",
        "email": "ana@x.com",
        "password": "pw123",
        "confirmPassword": "pw123",
    }


@pytest.fixture
def temp_db():
    """
    Create a temporary database for testing.

    This fixture creates a fresh SQLite database in a temp file,
    ensuring complete isolation between tests.
    """
    fd, db_path = tempfile.mkstemp(suffix='.db')
    os.close(fd)

    db = Database(db_path=db_path)
    yield db

    db.close()
    # WAL mode leaves side files next to the database
    for path in (db_path, f"{db_path}-wal", f"{db_path}-shm"):
        if os.path.exists(path):
            os.unlink(path)


@pytest.fixture
def user_repo(temp_db):
    """Create a UserRepository with the test database."""
    return UserRepository(db=temp_db)


@pytest.fixture
def patient_repo(temp_db):
    """Create a PatientRepository with the test database."""
    return PatientRepository(db=temp_db)


@pytest.fixture
def account_service(user_repo):
    """Create an AccountService with the test repository and fast hashing."""
    return AccountService(user_repository=user_repo, bcrypt_rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def patient_service(patient_repo):
    """Create a PatientService with the test repository."""
    return PatientService(patient_repository=patient_repo)


@pytest.fixture
def test_app(temp_db, user_repo, patient_repo, account_service, patient_service):
    """
    Create a FastAPI test app with dependency overrides.

    - Uses the real routers (testing actual endpoint code)
    - Injects test database and services via dependency_overrides
    - Registers exception handlers for proper error response testing
    """
    from api.routers import health_router, accounts_router, patients_router

    app = FastAPI(title="Clinic Service API Test")

    setup_exception_handlers(app)

    app.dependency_overrides[deps.get_database] = lambda: temp_db
    app.dependency_overrides[deps.get_user_repository] = lambda: user_repo
    app.dependency_overrides[deps.get_patient_repository] = lambda: patient_repo
    app.dependency_overrides[deps.get_account_service] = lambda: account_service
    app.dependency_overrides[deps.get_patient_service] = lambda: patient_service

    app.include_router(health_router)
    app.include_router(accounts_router)
    app.include_router(patients_router)

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app):
    """Create a test client for the API."""
    return TestClient(test_app)
