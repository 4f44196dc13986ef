"""CLI run logging service for pgentity-cli.

Provides a high-level interface for logging CLI command runs,
including automatic context capture and error handling.
"""

import logging
import os
import sys
import time
import traceback
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pgentity_cli.logging.cli_db import CLIRunDatabase

logger = logging.getLogger(__name__)

# Global logger instance
_cli_logger: Optional["CLIRunLogger"] = None


def get_cli_logger() -> "CLIRunLogger":
    """Get or create the global CLI logger instance."""
    global _cli_logger
    if _cli_logger is None:
        from pgentity_cli.config import settings

        _cli_logger = CLIRunLogger(
            db_path=settings.cli_logging_db_path,
            enabled=settings.cli_logging_enabled,
            retention_days=settings.cli_logging_retention_days,
        )
    return _cli_logger


@dataclass
class RunContext:
    """Context for a CLI run."""

    run_id: str
    command: str
    dialect: Optional[str] = None
    schema_name: Optional[str] = None
    output_path: Optional[str] = None
    arguments: Dict[str, Any] = field(default_factory=dict)
    start_time: float = field(default_factory=time.time)

    # Results that get populated during the run
    tables_count: int = 0
    columns_count: int = 0
    artifacts_written: List[str] = field(default_factory=list)


class CLIRunLogger:
    """High-level logger for CLI runs.

    Example usage:
        logger = get_cli_logger()

        with logger.log_run(
            command="generate",
            dialect="py-sqlalchemy",
            schema_name="public",
        ) as ctx:
            ctx.tables_count = 12
            ctx.artifacts_written = ["models.py"]

            # If error occurs, it's automatically logged
    """

    def __init__(self, db_path: Optional[str] = None, enabled: bool = True, retention_days: int = 30):
        """Initialize the CLI run logger.

        Args:
            db_path: Path to the SQLite database. If None, uses default.
            enabled: Whether logging is enabled.
            retention_days: Runs older than this are pruned on start-up.
        """
        self.enabled = enabled
        self._db: Optional[CLIRunDatabase] = None

        if self.enabled:
            try:
                self._db = CLIRunDatabase(db_path)
                self._db.initialize()
                self._db.cleanup_old_runs(retention_days)
            except Exception as e:
                logger.warning("Failed to initialize CLI logging: %s", e)
                self._db = None
                self.enabled = False

    @property
    def db(self) -> Optional[CLIRunDatabase]:
        """Get the database instance."""
        return self._db

    def _get_environment_info(self) -> Dict[str, str]:
        """Get environment information for logging."""
        return {
            "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
            "package_version": self._get_package_version(),
            "working_directory": os.getcwd(),
        }

    def _get_package_version(self) -> str:
        """Get the pgentity-cli package version."""
        from importlib.metadata import PackageNotFoundError, version

        try:
            return version("pgentity-cli")
        except PackageNotFoundError:
            return "unknown"

    @contextmanager
    def log_run(
        self,
        command: str,
        dialect: Optional[str] = None,
        schema_name: Optional[str] = None,
        output_path: Optional[str] = None,
        arguments: Optional[Dict[str, Any]] = None,
    ):
        """Context manager for logging a CLI run.

        Args:
            command: CLI command (e.g., 'generate')
            dialect: Requested dialect
            schema_name: Schema being introspected
            output_path: Output file or directory
            arguments: Command arguments worth keeping (never credentials)

        Yields:
            RunContext that can be updated during the run
        """
        ctx = RunContext(
            run_id=str(uuid.uuid4())[:8],
            command=command,
            dialect=dialect,
            schema_name=schema_name,
            output_path=output_path,
            arguments=arguments or {},
        )

        if not self.enabled or self._db is None:
            yield ctx
            return

        try:
            env_info = self._get_environment_info()
            self._db.insert_run(
                run_id=ctx.run_id,
                command=command,
                dialect=dialect,
                schema_name=schema_name,
                output_path=output_path,
                arguments=arguments,
                python_version=env_info["python_version"],
                package_version=env_info["package_version"],
                working_directory=env_info["working_directory"],
            )
        except Exception as e:
            logger.warning("Failed to log run start: %s", e)

        try:
            yield ctx
        except Exception as e:
            duration_ms = int((time.time() - ctx.start_time) * 1000)
            try:
                self._db.update_error(
                    run_id=ctx.run_id,
                    error_message=str(e),
                    error_type=type(e).__name__,
                    error_code=getattr(e, "code", None),
                    error_traceback=traceback.format_exc(),
                    duration_ms=duration_ms,
                )
            except Exception as log_err:
                logger.warning("Failed to log run error: %s", log_err)

            logger.debug("CLI run %s failed after %dms: %s", ctx.run_id, duration_ms, e)

            # Re-raise the original exception
            raise

        duration_ms = int((time.time() - ctx.start_time) * 1000)
        try:
            if ctx.tables_count > 0:
                self._db.update_generation_results(
                    run_id=ctx.run_id,
                    tables_count=ctx.tables_count,
                    columns_count=ctx.columns_count,
                    artifacts_written=ctx.artifacts_written,
                )
            self._db.update_success(ctx.run_id, duration_ms)
        except Exception as e:
            logger.warning("Failed to log run results: %s", e)

        logger.debug("CLI run %s completed successfully in %dms", ctx.run_id, duration_ms)

    def query_runs(
        self,
        status: Optional[str] = None,
        dialect: Optional[str] = None,
        since_hours: int = 24,
        limit: int = 100,
    ) -> List[Dict[str, Any]]:
        """Query CLI runs with optional filters."""
        if not self.enabled or not self._db:
            return []

        return self._db.query_runs(
            status=status,
            dialect=dialect,
            since_hours=since_hours,
            limit=limit,
        )

    def get_stats(self, since_hours: int = 24) -> Dict[str, Any]:
        """Get statistics about CLI runs."""
        if not self.enabled or not self._db:
            return {"error": "Logging not enabled"}

        return self._db.get_stats(since_hours=since_hours)

    def get_run(self, run_id: str) -> Optional[Dict[str, Any]]:
        """Get a specific run by ID."""
        if not self.enabled or not self._db:
            return None

        return self._db.get_run_by_id(run_id)


def log_cli_run(
    command: str,
    dialect: Optional[str] = None,
    schema_name: Optional[str] = None,
    output_path: Optional[str] = None,
    arguments: Optional[Dict[str, Any]] = None,
):
    """Convenience function to get a logging context manager.

    Example:
        with log_cli_run("generate", "ts-typeorm", "public", "./entities") as ctx:
            ctx.tables_count = 17
    """
    return get_cli_logger().log_run(
        command=command,
        dialect=dialect,
        schema_name=schema_name,
        output_path=output_path,
        arguments=arguments,
    )
