"""End-to-end generation: catalog -> schema model -> entities -> files."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

from .database.base import CatalogIntrospector
from .database.models import Table
from .dialects.base import DialectGenerator, GeneratedArtifact, write_artifacts

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Outcome of a completed generation run."""
    tables: List[Table] = field(default_factory=list)
    artifacts: List[GeneratedArtifact] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)

    @property
    def columns_count(self) -> int:
        return sum(len(t.columns) for t in self.tables)


def generate_entities(
    introspector: CatalogIntrospector,
    schema: str,
    generator: DialectGenerator,
    out_path: Union[str, Path],
) -> GenerationResult:
    """Load a schema and write its entities with the given dialect.

    Every artifact is rendered before anything is written, so a failing
    table leaves the output untouched.

    Raises:
        EntityGenError: On the first failure of any stage
    """
    tables = introspector.load(schema)
    logger.info("Loaded %d tables from schema %s", len(tables), schema)

    artifacts = generator.generate(tables, out_path)
    written = write_artifacts(artifacts)

    return GenerationResult(tables=tables, artifacts=artifacts, written=written)
