"""Base class for dialect generators."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from ..database.models import Column, Table
from ..database.type_mappers import TypeMapper
from ..errors import OutputWriteError
from ..rendering import TemplateRenderer
from .naming import to_camel_case

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityColumn:
    """A column as exposed to entity templates."""
    name: str
    attribute_name: str
    raw_type: str
    target_type: str
    is_array: bool = False
    is_primary_key: bool = False
    is_nullable: bool = False
    default_expression: Optional[str] = None


@dataclass
class GeneratedArtifact:
    """One output file produced by a dialect generator."""
    path: Path
    content: str
    tables: List[str] = field(default_factory=list)


class DialectGenerator(ABC):
    """Abstract base class for generating entity source code.

    A dialect owns its type mapper, its templates and its output layout.
    New output formats are added by subclassing and registering the
    subclass in ``pgentity_cli.dialects``.
    """

    name: str = ""
    description: str = ""
    header_template: str = ""
    entity_template: str = ""

    def __init__(self, renderer: Optional[TemplateRenderer] = None):
        self.renderer = renderer or TemplateRenderer()

    @property
    @abstractmethod
    def type_mapper(self) -> TypeMapper:
        """Return the type mapper used by this dialect."""
        pass

    @abstractmethod
    def resolve_type(self, table: Table, column: Column) -> str:
        """Return the target type expression for a column."""
        pass

    @abstractmethod
    def attribute_name(self, column: Column) -> str:
        """Return the property name used for a column in generated code."""
        pass

    @abstractmethod
    def build_context(self, table: Table) -> Dict[str, Any]:
        """Build the rendering context for one table."""
        pass

    @abstractmethod
    def generate(self, tables: Sequence[Table], out_path: Union[str, Path]) -> List[GeneratedArtifact]:
        """Generate all artifacts for the given tables.

        Args:
            tables: Tables in schema model order
            out_path: Output file or directory, depending on the dialect

        Returns:
            Artifacts to be written, in table order
        """
        pass

    def entity_column(self, table: Table, column: Column, attribute_name: Optional[str] = None) -> EntityColumn:
        return EntityColumn(
            name=column.name,
            attribute_name=attribute_name or self.attribute_name(column),
            raw_type=column.raw_type,
            target_type=self.resolve_type(table, column),
            is_array=column.is_array,
            is_primary_key=column.is_primary_key,
            is_nullable=column.is_nullable,
            default_expression=column.default_expression,
        )

    def base_context(self, table: Table) -> Dict[str, Any]:
        """Context keys shared by every dialect."""
        return {
            "table_name": table.name,
            "table_name_camel_cased": to_camel_case(table.name),
            "schema": table.schema,
        }

    def render_header(self) -> str:
        return self.renderer.render(self.header_template, {})

    def render_entity(self, table: Table) -> str:
        context = self.build_context(table)
        return self.renderer.render(self.entity_template, context, table=table.name)


def write_artifacts(artifacts: Sequence[GeneratedArtifact]) -> List[Path]:
    """Write generated artifacts to disk as UTF-8.

    Parent directories are created as needed.

    Returns:
        Paths written, in artifact order

    Raises:
        OutputWriteError: If a file cannot be written
    """
    written = []
    for artifact in artifacts:
        try:
            artifact.path.parent.mkdir(parents=True, exist_ok=True)
            artifact.path.write_text(artifact.content, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(str(artifact.path), e.strerror or str(e)) from e
        logger.debug("Wrote %s (%d bytes)", artifact.path, len(artifact.content))
        written.append(artifact.path)
    return written
