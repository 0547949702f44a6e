"""
Configuration module for the Clinic Service API.
Uses Pydantic BaseSettings for validation - app fails fast on malformed config.
"""
import logging
from pathlib import Path
from typing import List

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings with validation.

    Every field has a default so the service starts with no environment at all;
    values are overridden through environment variables or a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage Configuration
    clinic_svc_db_dir: str = Field(default="data", description="Database directory")
    clinic_svc_db_file: str = Field(default="user_registration.db", description="Database filename")
    clinic_svc_db_busy_timeout: int = Field(default=5000, ge=0, description="SQLite busy timeout in milliseconds")

    # API Configuration
    clinic_svc_host: str = Field(default="0.0.0.0", description="API host")
    clinic_svc_port: int = Field(
        default=5000,
        validation_alias=AliasChoices("PORT", "CLINIC_SVC_PORT"),
        description="API port (PORT takes precedence)",
    )
    clinic_svc_reload: bool = Field(default=False, description="Enable hot reload")
    clinic_svc_cors_origins: List[str] = Field(
        default=["http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )

    # Password Hashing
    clinic_svc_bcrypt_rounds: int = Field(default=10, description="bcrypt cost factor")

    @field_validator("clinic_svc_bcrypt_rounds")
    @classmethod
    def validate_bcrypt_rounds(cls, value: int) -> int:
        """bcrypt only accepts cost factors between 4 and 31."""
        if not 4 <= value <= 31:
            raise ValueError("bcrypt rounds must be between 4 and 31")
        if value < 10:
            logger.warning(
                "CLINIC_SVC_BCRYPT_ROUNDS below 10 - only use this for tests",
                extra={"bcrypt_rounds": value},
            )
        return value

    @property
    def database_path(self) -> str:
        """Get the full database path."""
        return str(Path(self.clinic_svc_db_dir) / self.clinic_svc_db_file)


# Create global settings instance - fails fast if config is malformed
settings = Settings()

DATABASE_PATH = settings.database_path
DATABASE_BUSY_TIMEOUT = settings.clinic_svc_db_busy_timeout

API_HOST = settings.clinic_svc_host
API_PORT = settings.clinic_svc_port
API_RELOAD = settings.clinic_svc_reload
CORS_ORIGINS = settings.clinic_svc_cors_origins

BCRYPT_ROUNDS = settings.clinic_svc_bcrypt_rounds
