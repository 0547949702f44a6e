"""
Base database connection, schema initialization and lifecycle.

This module handles database connection management and schema initialization.
Optimized for SQLite concurrency with WAL mode and busy_timeout.

IMPORTANT: Database instantiation should be done through the DI layer.
Use core.dependencies.get_database() instead of instantiating directly.
This ensures proper lifecycle management and testability.
"""
import sqlite3
import logging
from contextlib import contextmanager
from typing import Iterator, Optional
from pathlib import Path

from core.config import DATABASE_PATH, DATABASE_BUSY_TIMEOUT
from core.exceptions import StorageError, StorageUnavailableError

logger = logging.getLogger(__name__)


class Database:
    """
    SQLite database connection manager with an explicit lifecycle.

    Lifecycle:
    - Construction initializes the schema (the database is then ready)
    - ping() verifies the database can still be reached
    - close() shuts the manager down; later connection attempts raise
      StorageUnavailableError

    Uniqueness of usernames and emails is enforced by UNIQUE constraints
    here, not by the services.

    Usage:
        # Via dependency injection (recommended):
        from core.dependencies import get_database
        db = get_database()

        # Direct instantiation (for testing):
        db = Database(db_path="/tmp/test.db")
    """

    def __init__(self, db_path: Optional[str] = None, busy_timeout: Optional[int] = None):
        """
        Initialize database connection.

        Args:
            db_path: Path to SQLite database file. Defaults to config DATABASE_PATH.
            busy_timeout: SQLite busy timeout in milliseconds. Defaults to config value.
        """
        self.db_path = db_path or DATABASE_PATH
        self.busy_timeout = busy_timeout if busy_timeout is not None else DATABASE_BUSY_TIMEOUT
        self._closed = False

        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        self._init_db()

    @property
    def is_closed(self) -> bool:
        return self._closed

    def _configure_connection(self, conn: sqlite3.Connection) -> None:
        """
        Configure connection with optimal settings for concurrency.

        Args:
            conn: SQLite connection to configure.
        """
        # Wait for locks instead of failing immediately, but never forever
        conn.execute(f"PRAGMA busy_timeout = {self.busy_timeout}")
        conn.execute("PRAGMA foreign_keys = ON")
        conn.row_factory = sqlite3.Row

    def _init_db(self) -> None:
        """Initialize database schema and enable WAL mode if not already enabled."""
        conn = sqlite3.connect(self.db_path)
        try:
            self._configure_connection(conn)
            cursor = conn.cursor()

            # WAL mode persists in the database file, so this only needs to run once
            cursor.execute("PRAGMA journal_mode = WAL")
            result = cursor.fetchone()
            if result and result[0].lower() == 'wal':
                logger.info(f"SQLite WAL mode enabled for {self.db_path}")
            else:
                logger.warning(f"Failed to enable WAL mode, current mode: {result}")

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    first_name TEXT NOT NULL,
                    username TEXT NOT NULL UNIQUE,
                    email TEXT NOT NULL UNIQUE,
                    password TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

            # rowid preserves insertion order for listing
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS patients (
                    id TEXT PRIMARY KEY,
                    name TEXT,
                    age INTEGER,
                    gender TEXT,
                    disease TEXT,
                    antecedent TEXT,
                    diagnostic TEXT,
                    medicaments TEXT,
                    plan_traitement TEXT,
                    date_vaccination TEXT,
                    allergies TEXT,
                    resultats_test TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            conn.commit()
        finally:
            conn.close()

        logger.info(
            f"Database initialized: {self.db_path} "
            f"(busy_timeout={self.busy_timeout}ms)"
        )

    def get_connection(self) -> sqlite3.Connection:
        """
        Get a new database connection with concurrency settings.

        Returns:
            sqlite3.Connection: A new connection with rows accessible by column name.

        Raises:
            StorageUnavailableError: If the database was closed or cannot be opened.
        """
        if self._closed:
            raise StorageUnavailableError(operation="connect", reason="database closed")
        try:
            conn = sqlite3.connect(self.db_path)
            self._configure_connection(conn)
        except sqlite3.Error as exc:
            logger.exception(f"Failed to open database {self.db_path}")
            raise StorageUnavailableError(operation="connect") from exc
        return conn

    @contextmanager
    def transaction(self, operation: str) -> Iterator[sqlite3.Connection]:
        """
        Run statements in a single transaction on a fresh connection.

        Commits on success and rolls back on error. ``sqlite3.IntegrityError``
        is re-raised untouched so repositories can map constraint violations;
        every other ``sqlite3.Error`` is logged and raised as StorageError.

        Args:
            operation: Short operation name used in logs (e.g. "add_patient").
        """
        conn = self.get_connection()
        try:
            yield conn
            conn.commit()
        except sqlite3.IntegrityError:
            conn.rollback()
            raise
        except sqlite3.Error as exc:
            conn.rollback()
            logger.exception(f"Database error during {operation}")
            raise StorageError(operation=operation) from exc
        finally:
            conn.close()

    def ping(self) -> None:
        """
        Execute a trivial query to prove the database is reachable.

        Raises:
            StorageError: If the database is closed or unreachable.
        """
        with self.transaction("ping") as conn:
            conn.execute("SELECT 1")

    def close(self) -> None:
        """Shut down the database manager. Idempotent."""
        if not self._closed:
            self._closed = True
            logger.info(f"Database closed: {self.db_path}")
