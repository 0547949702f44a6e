"""
Repository for user account database operations.

Architecture:
    UserRepository is the data access layer for accounts.
    It should be injected via core.dependencies.get_user_repository().

All SQL is encapsulated in this repository - no SQL in service or API layers.
"""
import sqlite3
import logging
import uuid
from typing import Optional, Dict, Any

from repositories.base import Database
from core.datetime_utils import utc_timestamp

logger = logging.getLogger(__name__)

USER_COLUMNS = "id, first_name, username, email, password, created_at"


class UserRepository:
    """
    Repository for user account persistence.

    Users are only ever inserted and looked up; this service never updates
    or deletes them.
    """

    def __init__(self, db: Database):
        """
        Initialize the user repository.

        Args:
            db: Database instance for data access.
                Injected via core.dependencies.get_user_repository().
        """
        self._db = db

    @staticmethod
    def _row_to_dict(row: sqlite3.Row) -> Dict[str, Any]:
        return {
            "id": row["id"],
            "first_name": row["first_name"],
            "username": row["username"],
            "email": row["email"],
            "password": row["password"],
            "created_at": row["created_at"],
        }

    def add(
        self,
        first_name: str,
        username: str,
        email: str,
        password_hash: str
    ) -> Optional[Dict[str, Any]]:
        """
        Insert a new user and return the created record.

        Args:
            first_name: The user's first name.
            username: Unique login name.
            email: Unique email address.
            password_hash: bcrypt hash of the password (never the plain text).

        Returns:
            Optional[Dict[str, Any]]: The created user, or None if the username
                or email is already taken (UNIQUE constraint violation).
        """
        user_id = uuid.uuid4().hex
        try:
            with self._db.transaction("add_user") as conn:
                conn.execute(
                    f"INSERT INTO users ({USER_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                    (user_id, first_name, username, email, password_hash, utc_timestamp())
                )
                row = conn.execute(
                    f"SELECT {USER_COLUMNS} FROM users WHERE id = ?", (user_id,)
                ).fetchone()
        except sqlite3.IntegrityError:
            logger.info("User insert rejected by UNIQUE constraint")
            return None

        return self._row_to_dict(row)

    def exists_with_email_or_username(self, email: str, username: str) -> bool:
        """Check whether any user already holds the email or the username."""
        with self._db.transaction("find_user_by_email_or_username") as conn:
            row = conn.execute(
                "SELECT 1 FROM users WHERE email = ? OR username = ? LIMIT 1",
                (email, username)
            ).fetchone()
        return row is not None

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """
        Get a user by email.

        Returns:
            Optional[dict]: User dictionary (including the password hash) or None.
        """
        with self._db.transaction("get_user_by_email") as conn:
            row = conn.execute(
                f"SELECT {USER_COLUMNS} FROM users WHERE email = ?", (email,)
            ).fetchone()
        return self._row_to_dict(row) if row else None
