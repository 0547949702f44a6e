"""
FastAPI Dependency Injection configuration for the Clinic Service API.

Architecture Flow:
    API Layer (Routers)
         ↓ Depends()
    Service Layer (AccountService, PatientService)
         ↓ Injected
    Repository Layer (UserRepository, PatientRepository)
         ↓ Injected
    Database (SQLite, one instance per process)

Usage in Routers:
    from core.dependencies import get_patient_service

    @router.get("/patients")
    async def list_patients(
        patient_service: PatientService = Depends(get_patient_service)
    ):
        return patient_service.get_patients()

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_database] = lambda: test_database
"""
import logging
from typing import Optional, TYPE_CHECKING

from core.config import settings

if TYPE_CHECKING:
    from repositories import Database, PatientRepository, UserRepository
    from services import AccountService, PatientService

logger = logging.getLogger(__name__)


# =============================================================================
# DATABASE DEPENDENCY
# =============================================================================

# Created by init_database() at startup, released by close_database() at shutdown
_database_instance: Optional["Database"] = None


def init_database() -> "Database":
    """
    Create the process-wide database instance if it does not exist yet.

    Called from the application lifespan at startup.
    """
    global _database_instance

    if _database_instance is None:
        # Import here to avoid circular imports with repositories
        from repositories.base import Database

        logger.info(f"Initializing database: {settings.database_path}")
        _database_instance = Database(
            db_path=settings.database_path,
            busy_timeout=settings.clinic_svc_db_busy_timeout
        )
        logger.info("Database initialized successfully")

    return _database_instance


def get_database() -> "Database":
    """
    Get the database instance.

    Lazily initializes it when used outside the application lifespan
    (scripts, a TestClient without a ``with`` block).
    """
    return init_database()


def close_database() -> None:
    """Close and forget the database instance. Called at shutdown."""
    global _database_instance

    if _database_instance is not None:
        _database_instance.close()
        _database_instance = None


# =============================================================================
# REPOSITORY DEPENDENCIES
# =============================================================================

def get_user_repository() -> "UserRepository":
    """
    Get a UserRepository instance with database injected.

    Returns:
        UserRepository: Repository for account persistence.
    """
    from repositories import UserRepository

    return UserRepository(db=get_database())


def get_patient_repository() -> "PatientRepository":
    """
    Get a PatientRepository instance with database injected.

    Returns:
        PatientRepository: Repository for patient CRUD operations.
    """
    from repositories import PatientRepository

    return PatientRepository(db=get_database())


# =============================================================================
# SERVICE DEPENDENCIES
# =============================================================================

def get_account_service() -> "AccountService":
    """
    Get an AccountService instance with repository injected.

    Returns:
        AccountService: Service for registration and login.
    """
    from services import AccountService

    return AccountService(
        user_repository=get_user_repository(),
        bcrypt_rounds=settings.clinic_svc_bcrypt_rounds
    )


def get_patient_service() -> "PatientService":
    """
    Get a PatientService instance with repository injected.

    Returns:
        PatientService: Service for patient operations.
    """
    from services import PatientService

    return PatientService(patient_repository=get_patient_repository())
