"""Shared pytest fixtures for pgentity-cli tests."""

import pytest
from typing import List

from pgentity_cli.database.models import CatalogRow, Column, Table
from pgentity_cli.logging import cli_service
from pgentity_cli.logging.cli_service import CLIRunLogger

from .fixtures import FakeIntrospector


@pytest.fixture(autouse=True)
def isolated_run_logger(tmp_path, monkeypatch):
    """Keep run logging inside the test's temporary directory."""
    run_logger = CLIRunLogger(db_path=str(tmp_path / "cli_runs.db"))
    monkeypatch.setattr(cli_service, "_cli_logger", run_logger)
    yield run_logger
    if run_logger.db is not None:
        run_logger.db.close()


@pytest.fixture
def user_account_rows() -> List[CatalogRow]:
    """Catalog rows for a single user_account table."""
    return [
        CatalogRow(
            table_schema="public",
            table_name="user_account",
            column_name="id",
            data_type="integer",
            is_pk=True,
            column_default="nextval('user_account_id_seq'::regclass)",
        ),
        CatalogRow(
            table_schema="public",
            table_name="user_account",
            column_name="email",
            data_type="character varying",
            is_nullable=True,
        ),
        CatalogRow(
            table_schema="public",
            table_name="user_account",
            column_name="tags",
            data_type="text",
            is_array=True,
        ),
    ]


@pytest.fixture
def catalog_rows(user_account_rows) -> List[CatalogRow]:
    """Rows for several tables, interleaved and out of name order."""
    return [
        CatalogRow("public", "orders", "order_id", "bigint", is_pk=True),
        user_account_rows[0],
        CatalogRow("public", "orders", "placed_at", "timestamp with time zone"),
        user_account_rows[1],
        CatalogRow("public", "orders", "status", "USER-DEFINED"),
        CatalogRow("public", "orders", "amount", "numeric", is_nullable=True),
        user_account_rows[2],
        CatalogRow("public", "audit-log", "entry", "jsonb"),
        CatalogRow("public", "audit-log", "during", "tstzrange"),
    ]


@pytest.fixture
def fake_introspector(catalog_rows) -> FakeIntrospector:
    return FakeIntrospector(catalog_rows)


@pytest.fixture
def user_account_table() -> Table:
    return Table(
        name="user_account",
        schema="public",
        columns=(
            Column(
                name="id",
                raw_type="integer",
                is_primary_key=True,
                default_expression="nextval('user_account_id_seq'::regclass)",
            ),
            Column(name="email", raw_type="character varying", is_nullable=True),
            Column(name="tags", raw_type="text", is_array=True),
        ),
    )


@pytest.fixture
def hstore_table() -> Table:
    """A table with a column type no dialect knows."""
    return Table(
        name="settings",
        schema="public",
        columns=(
            Column(name="id", raw_type="uuid", is_primary_key=True),
            Column(name="attrs", raw_type="hstore", is_nullable=True),
        ),
    )
