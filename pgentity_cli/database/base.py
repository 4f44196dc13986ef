"""Abstract base class for catalog introspection."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Tuple

from ..errors import EmptySchemaError
from .models import CatalogRow, Column, Table

logger = logging.getLogger(__name__)

# information_schema reports composite and enum types with this marker
USER_DEFINED_TYPE = "USER-DEFINED"
ARRAY_MARKER = "[]"


def _normalize_type(data_type: str, is_array: bool) -> Tuple[str, bool]:
    """Strip any array marker from the type name, moving it onto the flag."""
    raw_type = data_type
    while raw_type.endswith(ARRAY_MARKER):
        raw_type = raw_type[: -len(ARRAY_MARKER)]
        is_array = True
    return raw_type, is_array


def build_tables(rows: Iterable[CatalogRow]) -> List[Table]:
    """Group flat catalog rows into tables.

    Rows whose type is user-defined, or whose type the catalog could not
    resolve (NULL, e.g. a domain over an array), are dropped. Columns keep
    the order in which they appear in the row stream; tables are sorted by
    name.

    Args:
        rows: Catalog rows for a single schema

    Returns:
        List of Table objects, sorted by table name
    """
    grouped: Dict[Tuple[str, str], List[Column]] = {}
    skipped = 0

    for row in rows:
        if row.data_type is None:
            logger.debug(
                "Skipping %s.%s.%s: unresolved type", row.table_schema, row.table_name, row.column_name
            )
            continue
        if row.data_type == USER_DEFINED_TYPE:
            skipped += 1
            continue

        raw_type, is_array = _normalize_type(row.data_type, row.is_array)
        column = Column(
            name=row.column_name,
            raw_type=raw_type,
            is_array=is_array,
            is_primary_key=row.is_pk,
            is_nullable=row.is_nullable,
            default_expression=row.column_default,
        )
        grouped.setdefault((row.table_schema, row.table_name), []).append(column)

    if skipped:
        logger.debug("Skipped %d user-defined columns", skipped)

    tables = [
        Table(name=name, schema=schema, columns=tuple(columns))
        for (schema, name), columns in grouped.items()
    ]
    tables.sort(key=lambda t: (t.name, t.schema))
    return tables


class CatalogIntrospector(ABC):
    """Abstract base class for catalog introspection.

    Subclasses provide the catalog query; grouping, filtering and ordering
    of its rows is shared here so it can be exercised without a database.
    """

    @abstractmethod
    def connect(self):
        """Establish connection to the database."""
        pass

    @abstractmethod
    def close(self):
        """Close the database connection."""
        pass

    @abstractmethod
    def fetch_catalog_rows(self, schema: str) -> List[CatalogRow]:
        """Run the catalog query for one schema.

        Args:
            schema: Schema name

        Returns:
            Flat list of CatalogRow objects
        """
        pass

    def load(self, schema: str) -> List[Table]:
        """Load every eligible table of a schema.

        Args:
            schema: Schema name

        Returns:
            Tables sorted by name

        Raises:
            ConnectionFailedError: If the catalog cannot be queried
            EmptySchemaError: If no eligible table is found
        """
        rows = self.fetch_catalog_rows(schema)
        logger.debug("Catalog returned %d rows for schema %s", len(rows), schema)

        tables = build_tables(rows)
        if not tables:
            raise EmptySchemaError(schema)
        return tables

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
