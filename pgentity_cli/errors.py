"""Error types for pgentity-cli."""

from typing import Optional, Dict, Any


class EntityGenError(Exception):
    """Base exception for entity generation errors."""

    def __init__(self, message: str, code: str = "ENTITY_GEN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a dictionary (used for run logging)."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConnectionFailedError(EntityGenError):
    """The catalog could not be reached or the catalog query failed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONNECTION_FAILED", details=details)


class EmptySchemaError(EntityGenError):
    """The schema holds no eligible tables."""

    def __init__(self, schema_name: str):
        super().__init__(
            f"No tables found in schema '{schema_name}'",
            code="EMPTY_SCHEMA",
            details={"schema": schema_name},
        )
        self.schema_name = schema_name


class UnmappedTypeError(EntityGenError):
    """A column type has no mapping in a strict dialect."""

    def __init__(self, raw_type: str, table: str, column: str, dialect: Optional[str] = None):
        message = f"Unhandled type '{raw_type}' for column {table}.{column}"
        if dialect:
            message = f"Dialect '{dialect}': {message}"
        super().__init__(
            message,
            code="UNMAPPED_TYPE",
            details={"raw_type": raw_type, "table": table, "column": column, "dialect": dialect},
        )
        self.raw_type = raw_type
        self.table = table
        self.column = column


class TemplateRenderError(EntityGenError):
    """The template engine failed to render an entity."""

    def __init__(self, template_name: str, reason: str, table: Optional[str] = None):
        location = f" for table '{table}'" if table else ""
        super().__init__(
            f"Failed to render template '{template_name}'{location}: {reason}",
            code="TEMPLATE_RENDER_FAILED",
            details={"template": template_name, "table": table},
        )
        self.template_name = template_name
        self.table = table


class UnknownDialectError(EntityGenError):
    """The requested dialect name is not registered."""

    def __init__(self, dialect: str, available: Optional[list] = None):
        available = available or []
        message = f"Unknown dialect '{dialect}'"
        if available:
            message += f" (expected one of: {', '.join(available)})"
        super().__init__(message, code="UNKNOWN_DIALECT", details={"dialect": dialect, "available": available})
        self.dialect = dialect


class OutputWriteError(EntityGenError):
    """A generated artifact could not be written."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Cannot write {path}: {reason}",
            code="OUTPUT_WRITE_FAILED",
            details={"path": path},
        )
        self.path = path
