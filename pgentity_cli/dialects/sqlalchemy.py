"""SQLAlchemy declarative model generator."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from ..database.models import Column, Table
from ..database.type_mappers import SQLAlchemyTypeMapper, TypeMapper
from ..errors import UnmappedTypeError
from ..rendering import TemplateRenderer
from .base import DialectGenerator, GeneratedArtifact
from .naming import to_python_identifier, to_python_identifiers

logger = logging.getLogger(__name__)


class SQLAlchemyGenerator(DialectGenerator):
    """Generates one Python module holding every table as a declarative model.

    Unknown column types abort generation with UnmappedTypeError.
    """

    name = "py-sqlalchemy"
    description = "SQLAlchemy declarative models, one combined .py file"
    header_template = "sqlalchemy_header.py.j2"
    entity_template = "entity.py.j2"

    def __init__(self, renderer: Optional[TemplateRenderer] = None):
        super().__init__(renderer)
        self._type_mapper = SQLAlchemyTypeMapper()

    @property
    def type_mapper(self) -> TypeMapper:
        return self._type_mapper

    def resolve_type(self, table: Table, column: Column) -> str:
        target = self._type_mapper.map_column_type(column.raw_type, column.is_array)
        if target is None:
            raise UnmappedTypeError(column.raw_type, table.name, column.name, dialect=self.name)
        return target

    def attribute_name(self, column: Column) -> str:
        return to_python_identifier(column.name)

    def build_context(self, table: Table) -> Dict[str, Any]:
        """Primary keys are exposed separately from the other columns.

        Attribute names are made unique across the whole table.
        """
        names = dict(zip(table.columns, to_python_identifiers(c.name for c in table.columns)))
        context = self.base_context(table)
        context["columns"] = [self.entity_column(table, c, names[c]) for c in table.non_primary_key_columns]
        context["pk_columns"] = [self.entity_column(table, c, names[c]) for c in table.primary_key_columns]
        return context

    def generate(self, tables: Sequence[Table], out_path: Union[str, Path]) -> List[GeneratedArtifact]:
        """Render the header followed by one model per table into a single file."""
        parts = [self.render_header()]
        for table in tables:
            logger.info("Generating model for %s", table.qualified_name)
            parts.append(self.render_entity(table))

        return [
            GeneratedArtifact(
                path=Path(out_path),
                content="".join(parts),
                tables=[t.name for t in tables],
            )
        ]
