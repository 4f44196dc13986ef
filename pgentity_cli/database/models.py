"""Schema model built from catalog introspection."""

from typing import Optional, Tuple
from dataclasses import dataclass, field


@dataclass(frozen=True)
class CatalogRow:
    """One flat row returned by the catalog query.

    ``data_type`` already holds the element type for array columns;
    ``is_array`` carries the array-ness separately. ``data_type`` is None
    when the element type cannot be resolved.
    """
    table_schema: str
    table_name: str
    column_name: str
    data_type: Optional[str]
    is_array: bool = False
    is_pk: bool = False
    is_nullable: bool = False
    column_default: Optional[str] = None


@dataclass(frozen=True)
class Column:
    """Represents a database column."""
    name: str
    raw_type: str
    is_array: bool = False
    is_primary_key: bool = False
    is_nullable: bool = False
    default_expression: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.name}: {self.raw_type}{'[]' if self.is_array else ''}"


@dataclass(frozen=True)
class Table:
    """Represents a database table.

    Two tables are equal when schema and name match; columns are ignored.
    """
    name: str
    schema: str
    columns: Tuple[Column, ...] = field(default=(), compare=False)

    @property
    def qualified_name(self) -> str:
        return f"{self.schema}.{self.name}"

    @property
    def primary_key_columns(self) -> Tuple[Column, ...]:
        """Columns participating in the primary key, in catalog order."""
        return tuple(col for col in self.columns if col.is_primary_key)

    @property
    def non_primary_key_columns(self) -> Tuple[Column, ...]:
        return tuple(col for col in self.columns if not col.is_primary_key)
