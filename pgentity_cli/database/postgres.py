"""PostgreSQL catalog introspector."""

import logging
from typing import List, Optional

import psycopg2
import psycopg2.extras

from ..errors import ConnectionFailedError
from .base import CatalogIntrospector
from .models import CatalogRow

logger = logging.getLogger(__name__)


# Array columns report 'ARRAY' in information_schema.columns; the element
# type is resolved through information_schema.element_types.
CATALOG_QUERY = """
    SELECT
        c.table_schema,
        c.table_name,
        c.column_name,
        c.column_default,
        c.is_nullable = 'YES' AS is_nullable,
        c.column_name IN (
            SELECT pg_attribute.attname
            FROM pg_index, pg_class, pg_attribute, pg_namespace
            WHERE pg_class.oid = (quote_ident(c.table_schema) || '.' || quote_ident(c.table_name))::regclass
              AND indrelid = pg_class.oid
              AND nspname = c.table_schema
              AND pg_class.relnamespace = pg_namespace.oid
              AND pg_attribute.attrelid = pg_class.oid
              AND pg_attribute.attnum = ANY(pg_index.indkey)
              AND indisprimary
        ) AS is_pk,
        CASE
            WHEN c.data_type = 'ARRAY' THEN e.data_type
            ELSE c.data_type
        END AS data_type,
        c.data_type = 'ARRAY' AS is_array
    FROM information_schema.columns c
    LEFT JOIN information_schema.element_types e
        ON ((c.table_catalog, c.table_schema, c.table_name, 'TABLE', c.dtd_identifier)
            = (e.object_catalog, e.object_schema, e.object_name, e.object_type, e.collection_type_identifier))
    WHERE c.table_schema = %s
      AND c.data_type != 'USER-DEFINED'
    ORDER BY c.table_name, c.ordinal_position
"""


class PostgresIntrospector(CatalogIntrospector):
    """Client for introspecting a PostgreSQL schema."""

    def __init__(self, url: str, connect_timeout: Optional[int] = None):
        """Initialize the introspector.

        Args:
            url: libpq connection string or postgresql:// URL
            connect_timeout: Seconds to wait for the connection
        """
        self.url = url
        self.connect_timeout = connect_timeout
        self._connection = None

    def connect(self):
        """Connect to PostgreSQL."""
        if self._connection is not None:
            return self._connection

        kwargs = {}
        if self.connect_timeout:
            kwargs["connect_timeout"] = self.connect_timeout

        try:
            self._connection = psycopg2.connect(self.url, **kwargs)
        except psycopg2.Error as e:
            raise ConnectionFailedError(str(e).strip()) from e

        # Catalog reads only
        self._connection.set_session(readonly=True, autocommit=True)
        return self._connection

    def close(self):
        """Close the connection."""
        if self._connection:
            self._connection.close()
            self._connection = None

    def fetch_catalog_rows(self, schema: str) -> List[CatalogRow]:
        """Run the catalog query for one schema."""
        conn = self.connect()
        try:
            with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cursor:
                cursor.execute(CATALOG_QUERY, (schema,))
                result = cursor.fetchall()
        except psycopg2.Error as e:
            raise ConnectionFailedError(
                str(e).strip(),
                details={"schema": schema},
            ) from e

        logger.debug("Fetched %d catalog rows from %s", len(result), schema)
        return [
            CatalogRow(
                table_schema=row["table_schema"],
                table_name=row["table_name"],
                column_name=row["column_name"],
                data_type=row["data_type"],
                is_array=bool(row["is_array"]),
                is_pk=bool(row["is_pk"]),
                is_nullable=bool(row["is_nullable"]),
                column_default=row["column_default"],
            )
            for row in result
        ]
