"""Entity code generation for the supported ORM dialects."""

from typing import Dict, List, Optional, Type

from ..errors import UnknownDialectError
from ..rendering import TemplateRenderer
from .base import DialectGenerator, EntityColumn, GeneratedArtifact, write_artifacts
from .naming import to_camel_case
from .sqlalchemy import SQLAlchemyGenerator
from .typeorm import TypeORMGenerator

DIALECTS: Dict[str, Type[DialectGenerator]] = {
    SQLAlchemyGenerator.name: SQLAlchemyGenerator,
    TypeORMGenerator.name: TypeORMGenerator,
}


def available_dialects() -> List[str]:
    """Names of all registered dialects, sorted."""
    return sorted(DIALECTS)


def get_dialect(name: str, renderer: Optional[TemplateRenderer] = None) -> DialectGenerator:
    """Instantiate the generator registered under ``name``.

    Raises:
        UnknownDialectError: If no dialect has that name
    """
    generator_cls = DIALECTS.get(name)
    if generator_cls is None:
        raise UnknownDialectError(name, available_dialects())
    return generator_cls(renderer=renderer)


__all__ = [
    "DIALECTS",
    "DialectGenerator",
    "EntityColumn",
    "GeneratedArtifact",
    "SQLAlchemyGenerator",
    "TypeORMGenerator",
    "available_dialects",
    "get_dialect",
    "to_camel_case",
    "write_artifacts",
]
