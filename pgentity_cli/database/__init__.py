"""Catalog introspection module for pgentity-cli.

Builds the in-memory schema model from PostgreSQL catalog rows and maps
column types for each target dialect.
"""

from .models import CatalogRow, Column, Table
from .base import CatalogIntrospector, build_tables
from .type_mappers import TypeMapper, SQLAlchemyTypeMapper, TypeORMTypeMapper
from .postgres import PostgresIntrospector

__all__ = [
    # Data models
    "CatalogRow",
    "Column",
    "Table",
    # Loading
    "CatalogIntrospector",
    "build_tables",
    "PostgresIntrospector",
    # Type mappers
    "TypeMapper",
    "SQLAlchemyTypeMapper",
    "TypeORMTypeMapper",
]
