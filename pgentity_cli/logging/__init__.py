"""CLI run logging module for pgentity-cli.

Records each generate run in a local SQLite database to help with
debugging and auditing.
"""

from pgentity_cli.logging.cli_db import CLIRunDatabase, get_default_cli_db_path
from pgentity_cli.logging.cli_service import (
    CLIRunLogger,
    RunContext,
    get_cli_logger,
    log_cli_run,
)

__all__ = [
    "CLIRunDatabase",
    "get_default_cli_db_path",
    "CLIRunLogger",
    "RunContext",
    "get_cli_logger",
    "log_cli_run",
]
