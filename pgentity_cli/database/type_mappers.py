"""Dialect-specific type mapping strategies."""

from abc import ABC, abstractmethod
from typing import Dict, Optional


class TypeMapper(ABC):
    """Abstract base class for PostgreSQL type mapping.

    ``map_scalar`` only ever sees element types; array wrapping is applied
    separately through ``wrap_array``.
    """

    @abstractmethod
    def map_scalar(self, raw_type: str) -> Optional[str]:
        """Convert a PostgreSQL scalar type to a target type expression.

        Returns None for types outside the allow-list.
        """
        pass

    @abstractmethod
    def wrap_array(self, scalar: str) -> str:
        """Wrap a scalar target type in the target's array construct."""
        pass

    def map_column_type(self, raw_type: str, is_array: bool) -> Optional[str]:
        """Map a scalar type and wrap it once if the column is an array."""
        scalar = self.map_scalar(raw_type)
        if scalar is None:
            return None
        if is_array:
            return self.wrap_array(scalar)
        return scalar


class SQLAlchemyTypeMapper(TypeMapper):
    """Type mapper for SQLAlchemy declarative models."""

    EXACT_TYPES: Dict[str, str] = {
        "boolean": "sa.Boolean",
        "smallint": "sa.SmallInteger",
        "integer": "sa.Integer",
        "bigint": "sa.BigInteger",
        "double precision": "sa.Float",
        "single precision": "sa.Float",
        "real": "sa.Float",
        "numeric": "sa.Numeric",
        "character": "sa.CHAR",
        "text": "sa.Text",
        "uuid": "pg.UUID",
        "date": "sa.Date",
        "time without time zone": "sa.Time",
        "time with time zone": "sa.Time(True)",
        "interval": "pg.INTERVAL",
        "json": "sa.JSON",
        "jsonb": "pg.JSONB",
        "bytea": "sa.LargeBinary",
        "inet": "pg.INET",
        "tstzrange": "pg.TSTZRANGE",
        "int4range": "pg.INT4RANGE",
        # Declared by the generated file header
        "box": "_PgBox",
        "polygon": "_PgPolygon",
    }

    def map_scalar(self, raw_type: str) -> Optional[str]:
        """Convert a PostgreSQL type to a SQLAlchemy column type."""
        if raw_type.startswith("character varying"):
            return "sa.String"
        # Range check must come before the generic timestamp prefix
        elif raw_type.startswith("timestamp") and raw_type.endswith("range"):
            return "pg.TSTZRANGE"
        elif raw_type.startswith("timestamp"):
            return "sa.DateTime(True)"
        return self.EXACT_TYPES.get(raw_type)

    def wrap_array(self, scalar: str) -> str:
        return f"sa.ARRAY({scalar})"


class TypeORMTypeMapper(TypeMapper):
    """Type mapper for TypeORM (TypeScript) entities."""

    EXACT_TYPES: Dict[str, str] = {
        "boolean": "boolean",
        "smallint": "number",
        "integer": "number",
        "real": "number",
        "double precision": "number",
        "bigint": "BigInt",
        # pg returns numeric as a string to avoid precision loss
        "numeric": "string",
        "character": "string",
        "text": "string",
        "uuid": "string",
        "date": "Date",
        "json": "object",
        "jsonb": "object",
    }

    # Used when map_scalar has no answer
    FALLBACK_TYPE = "any"

    def map_scalar(self, raw_type: str) -> Optional[str]:
        """Convert a PostgreSQL type to a TypeScript type."""
        if raw_type.startswith("character varying"):
            return "string"
        elif raw_type.endswith("range"):
            return "string"
        elif raw_type.startswith("timestamp"):
            return "Date"
        return self.EXACT_TYPES.get(raw_type)

    def wrap_array(self, scalar: str) -> str:
        return f"{scalar}[]"
