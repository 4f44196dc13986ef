"""TypeORM entity generator."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from ..database.models import Column, Table
from ..database.type_mappers import TypeMapper, TypeORMTypeMapper
from ..errors import OutputWriteError
from ..rendering import TemplateRenderer
from .base import DialectGenerator, GeneratedArtifact
from .naming import to_ts_property

logger = logging.getLogger(__name__)

# Characters that cannot appear in a single file name on any platform
UNSAFE_FILE_NAME_CHARS = ("/", "\\", "\0")


class TypeORMGenerator(DialectGenerator):
    """Generates one TypeScript file per table.

    Columns whose type is unknown are typed as ``any``.
    """

    name = "ts-typeorm"
    description = "TypeORM entities, one .ts file per table"
    header_template = "typeorm_header.ts.j2"
    entity_template = "entity.ts.j2"
    file_extension = ".ts"

    def __init__(self, renderer: Optional[TemplateRenderer] = None):
        super().__init__(renderer)
        self._type_mapper = TypeORMTypeMapper()

    @property
    def type_mapper(self) -> TypeMapper:
        return self._type_mapper

    def resolve_type(self, table: Table, column: Column) -> str:
        target = self._type_mapper.map_scalar(column.raw_type)
        if target is None:
            logger.debug(
                "No TypeScript type for %s (%s.%s), using %s",
                column.raw_type, table.name, column.name, TypeORMTypeMapper.FALLBACK_TYPE,
            )
            target = TypeORMTypeMapper.FALLBACK_TYPE
        if column.is_array:
            target = self._type_mapper.wrap_array(target)
        return target

    def attribute_name(self, column: Column) -> str:
        return to_ts_property(column.name)

    def build_context(self, table: Table) -> Dict[str, Any]:
        context = self.base_context(table)
        context["columns"] = [self.entity_column(table, c) for c in table.columns]
        return context

    def file_name(self, table: Table) -> str:
        return f"{table.name}{self.file_extension}"

    def entity_path(self, out_dir: Path, table: Table) -> Path:
        """Path of the entity file for a table, which must stay inside ``out_dir``.

        Raises:
            OutputWriteError: If the table name contains a path separator or NUL
        """
        path = out_dir / self.file_name(table)
        if any(char in table.name for char in UNSAFE_FILE_NAME_CHARS):
            raise OutputWriteError(str(path), f"table name '{table.name}' is not a valid file name")
        return path

    def generate(self, tables: Sequence[Table], out_path: Union[str, Path]) -> List[GeneratedArtifact]:
        """Render one file per table under the output directory."""
        out_dir = Path(out_path)
        header = self.render_header()

        artifacts = []
        for table in tables:
            logger.info("Generating entity for %s", table.qualified_name)
            artifacts.append(
                GeneratedArtifact(
                    path=self.entity_path(out_dir, table),
                    content=header + self.render_entity(table),
                    tables=[table.name],
                )
            )
        return artifacts
