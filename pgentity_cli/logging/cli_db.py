"""Database operations for CLI run logging."""

import sqlite3
import logging
import json
from pathlib import Path
from typing import Optional, List, Dict, Any
from datetime import datetime, timedelta, timezone

logger = logging.getLogger(__name__)


# SQL schema for CLI run logging
SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS cli_runs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    run_id TEXT UNIQUE NOT NULL,
    timestamp DATETIME DEFAULT CURRENT_TIMESTAMP,
    command TEXT NOT NULL,
    dialect TEXT,
    schema_name TEXT,
    output_path TEXT,
    arguments TEXT,  -- JSON of all arguments
    status TEXT DEFAULT 'started',  -- 'started', 'success', 'error'
    duration_ms INTEGER,

    -- Generation results
    tables_count INTEGER,
    columns_count INTEGER,
    artifacts_written TEXT,  -- JSON array of file paths

    -- Error information
    error_message TEXT,
    error_type TEXT,
    error_code TEXT,
    error_traceback TEXT,

    -- Environment info
    python_version TEXT,
    package_version TEXT,
    working_directory TEXT
);

CREATE INDEX IF NOT EXISTS idx_cli_runs_timestamp ON cli_runs(timestamp);
CREATE INDEX IF NOT EXISTS idx_cli_runs_status ON cli_runs(status);
CREATE INDEX IF NOT EXISTS idx_cli_runs_dialect ON cli_runs(dialect);
"""

# Matches SQLite's CURRENT_TIMESTAMP so string comparison works
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _since(hours: float) -> str:
    return (datetime.now(timezone.utc) - timedelta(hours=hours)).strftime(TIMESTAMP_FORMAT)


def get_default_cli_db_path() -> str:
    """Get the default database path (~/.pgentity/cli_runs.db)."""
    pgentity_dir = Path.home() / ".pgentity"
    pgentity_dir.mkdir(exist_ok=True)
    return str(pgentity_dir / "cli_runs.db")


class CLIRunDatabase:
    """SQLite database for CLI run logging."""

    def __init__(self, db_path: Optional[str] = None):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file. If None, uses default.
        """
        self.db_path = db_path or get_default_cli_db_path()
        self._connection: Optional[sqlite3.Connection] = None
        self._initialized = False

    def _get_connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = sqlite3.connect(
                self.db_path,
                isolation_level=None,  # Auto-commit mode
            )
            self._connection.row_factory = sqlite3.Row
        return self._connection

    def initialize(self) -> None:
        """Initialize database schema."""
        if self._initialized:
            return

        try:
            conn = self._get_connection()
            conn.executescript(SCHEMA_SQL)
            self._initialized = True
            logger.debug("CLI logging database initialized at %s", self.db_path)
        except Exception as e:
            logger.error("Failed to initialize CLI logging database: %s", e)
            raise

    def close(self) -> None:
        """Close database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None
            self._initialized = False

    def insert_run(
        self,
        run_id: str,
        command: str,
        dialect: Optional[str] = None,
        schema_name: Optional[str] = None,
        output_path: Optional[str] = None,
        arguments: Optional[Dict[str, Any]] = None,
        python_version: Optional[str] = None,
        package_version: Optional[str] = None,
        working_directory: Optional[str] = None,
    ) -> int:
        """Insert a new CLI run entry.

        Args:
            run_id: Unique identifier for this run
            command: CLI command (e.g., 'generate')
            dialect: Requested dialect name
            schema_name: Schema being introspected
            output_path: Output file or directory
            arguments: Dictionary of command arguments (connection URL excluded)
            python_version: Python version
            package_version: pgentity-cli version
            working_directory: Current working directory

        Returns:
            The row ID of the inserted entry
        """
        self.initialize()
        conn = self._get_connection()

        arguments_json = json.dumps(arguments) if arguments else None

        cursor = conn.execute(
            """
            INSERT INTO cli_runs (
                run_id, command, dialect, schema_name, output_path, arguments,
                status, python_version, package_version, working_directory
            )
            VALUES (?, ?, ?, ?, ?, ?, 'started', ?, ?, ?)
            """,
            (
                run_id, command, dialect, schema_name, output_path, arguments_json,
                python_version, package_version, working_directory,
            ),
        )
        return cursor.lastrowid

    def update_generation_results(
        self,
        run_id: str,
        tables_count: int,
        columns_count: int,
        artifacts_written: List[str],
    ) -> None:
        """Update run with generation results."""
        conn = self._get_connection()
        conn.execute(
            """
            UPDATE cli_runs
            SET tables_count = ?, columns_count = ?, artifacts_written = ?
            WHERE run_id = ?
            """,
            (tables_count, columns_count, json.dumps(artifacts_written), run_id),
        )

    def update_success(self, run_id: str, duration_ms: int) -> None:
        """Mark run as successful."""
        conn = self._get_connection()
        conn.execute(
            """
            UPDATE cli_runs
            SET status = 'success', duration_ms = ?
            WHERE run_id = ?
            """,
            (duration_ms, run_id),
        )

    def update_error(
        self,
        run_id: str,
        error_message: str,
        error_type: Optional[str] = None,
        error_code: Optional[str] = None,
        error_traceback: Optional[str] = None,
        duration_ms: Optional[int] = None,
    ) -> None:
        """Mark run as failed with error details.

        Args:
            run_id: Run identifier
            error_message: Error message
            error_type: Exception type
            error_code: EntityGenError code, when available
            error_traceback: Full traceback
            duration_ms: Duration until error
        """
        conn = self._get_connection()
        conn.execute(
            """
            UPDATE cli_runs
            SET status = 'error', error_message = ?, error_type = ?, error_code = ?,
                error_traceback = ?, duration_ms = ?
            WHERE run_id = ?
            """,
            (error_message, error_type, error_code, error_traceback, duration_ms, run_id),
        )

    def query_runs(
        self,
        status: Optional[str] = None,
        dialect: Optional[str] = None,
        since_hours: int = 24,
        limit: int = 100,
    ) -> List[Dict[str, Any]]:
        """Query run entries with optional filters, newest first."""
        self.initialize()
        conn = self._get_connection()

        conditions = ["timestamp >= ?"]
        params: List[Any] = [_since(since_hours)]

        if status:
            conditions.append("status = ?")
            params.append(status)

        if dialect:
            conditions.append("dialect = ?")
            params.append(dialect)

        params.append(limit)
        query = f"""
            SELECT * FROM cli_runs
            WHERE {" AND ".join(conditions)}
            ORDER BY timestamp DESC, id DESC
            LIMIT ?
        """

        cursor = conn.execute(query, params)
        return [dict(row) for row in cursor.fetchall()]

    def get_run_by_id(self, run_id: str) -> Optional[Dict[str, Any]]:
        """Get a specific run by ID."""
        self.initialize()
        conn = self._get_connection()

        cursor = conn.execute(
            "SELECT * FROM cli_runs WHERE run_id = ?",
            (run_id,),
        )
        row = cursor.fetchone()

        return dict(row) if row else None

    def get_stats(self, since_hours: int = 24) -> Dict[str, Any]:
        """Get statistics about CLI runs.

        Args:
            since_hours: Look back N hours

        Returns:
            Dict with statistics
        """
        self.initialize()
        conn = self._get_connection()
        since_time = _since(since_hours)

        cursor = conn.execute(
            """
            SELECT
                COUNT(*) as total,
                SUM(CASE WHEN status = 'success' THEN 1 ELSE 0 END) as success_count,
                SUM(CASE WHEN status = 'error' THEN 1 ELSE 0 END) as error_count,
                AVG(duration_ms) as avg_duration_ms,
                SUM(tables_count) as total_tables
            FROM cli_runs
            WHERE timestamp >= ?
            """,
            (since_time,),
        )
        row = cursor.fetchone()

        cursor = conn.execute(
            """
            SELECT dialect, COUNT(*) as count,
                   SUM(CASE WHEN status = 'success' THEN 1 ELSE 0 END) as success,
                   SUM(CASE WHEN status = 'error' THEN 1 ELSE 0 END) as errors
            FROM cli_runs
            WHERE timestamp >= ? AND dialect IS NOT NULL
            GROUP BY dialect
            ORDER BY count DESC
            """,
            (since_time,),
        )
        dialect_stats = [dict(r) for r in cursor.fetchall()]

        return {
            "total_runs": row["total"] or 0,
            "success_count": row["success_count"] or 0,
            "error_count": row["error_count"] or 0,
            "avg_duration_ms": round(row["avg_duration_ms"] or 0, 2),
            "total_tables_generated": row["total_tables"] or 0,
            "since_hours": since_hours,
            "by_dialect": dialect_stats,
        }

    def cleanup_old_runs(self, retention_days: int = 30) -> int:
        """Delete runs older than retention period.

        Returns:
            Number of deleted rows
        """
        self.initialize()
        conn = self._get_connection()

        cursor = conn.execute(
            "DELETE FROM cli_runs WHERE timestamp < ?",
            (_since(retention_days * 24),),
        )
        deleted = cursor.rowcount
        if deleted:
            logger.debug("Deleted %d CLI runs older than %d days", deleted, retention_days)
        return deleted
