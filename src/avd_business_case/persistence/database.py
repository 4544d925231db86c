"""SQLite database connection and schema management."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from avd_business_case.config import get_settings


class Database:
    """
    SQLite database connection manager.

    Opens a short-lived connection per operation and initializes the schema.
    """

    SCHEMA_VERSION = 1

    SCHEMA_SQL = """
    -- Saved scenarios
    CREATE TABLE IF NOT EXISTS scenarios (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        kind TEXT NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        company_name TEXT,
        user_count INTEGER
    );

    -- Scenario inputs and results (JSON storage)
    CREATE TABLE IF NOT EXISTS scenario_data (
        scenario_id TEXT PRIMARY KEY,
        inputs_json TEXT NOT NULL,
        result_json TEXT NOT NULL,
        FOREIGN KEY (scenario_id) REFERENCES scenarios(id)
    );

    -- Schema version tracking
    CREATE TABLE IF NOT EXISTS schema_version (
        version INTEGER PRIMARY KEY
    );

    -- Indexes
    CREATE INDEX IF NOT EXISTS idx_scenarios_created_at ON scenarios(created_at);
    CREATE INDEX IF NOT EXISTS idx_scenarios_kind ON scenarios(kind);
    """

    def __init__(self, db_path: Path | str | None = None):
        """
        Initialize database connection.

        Args:
            db_path: Path to SQLite database file (defaults to config)
        """
        if db_path is None:
            settings = get_settings()
            db_path = settings.db_path

        self.db_path = Path(db_path)
        self._ensure_directory()
        self._init_schema()

    def _ensure_directory(self) -> None:
        """Ensure database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _init_schema(self) -> None:
        """Initialize database schema."""
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.executescript(self.SCHEMA_SQL)
            cursor.execute(
                "INSERT OR IGNORE INTO schema_version (version) VALUES (?)",
                (self.SCHEMA_VERSION,),
            )
            conn.commit()

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """
        Get a database connection.

        Yields:
            SQLite connection with row factory enabled
        """
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row

        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """
        Get a database connection with automatic transaction handling.

        Yields:
            SQLite connection that will commit on success or rollback on error
        """
        with self.connection() as conn:
            try:
                yield conn
                conn.commit()
            except Exception:
                conn.rollback()
                raise

    def fetch_one(
        self,
        sql: str,
        params: tuple | dict | None = None,
    ) -> sqlite3.Row | None:
        """
        Fetch a single row.

        Args:
            sql: SQL query
            params: Query parameters

        Returns:
            Row or None if not found
        """
        with self.connection() as conn:
            return conn.execute(sql, params or ()).fetchone()

    def fetch_all(
        self,
        sql: str,
        params: tuple | dict | None = None,
    ) -> list[sqlite3.Row]:
        """
        Fetch all rows.

        Args:
            sql: SQL query
            params: Query parameters

        Returns:
            List of rows
        """
        with self.connection() as conn:
            return conn.execute(sql, params or ()).fetchall()

    def clear_all(self) -> None:
        """Clear all data from database (for testing)."""
        with self.transaction() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM scenario_data")
            cursor.execute("DELETE FROM scenarios")
