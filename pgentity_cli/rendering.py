"""Template rendering for generated entities."""

import logging
from typing import Any, Dict, Optional

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from .errors import TemplateRenderError

logger = logging.getLogger(__name__)


class TemplateRenderer:
    """Renders the bundled entity templates.

    Templates live in ``pgentity_cli/templates``; an alternative Jinja2
    loader can be supplied (tests use a DictLoader).
    """

    def __init__(self, loader=None):
        self.env = Environment(
            loader=loader or PackageLoader("pgentity_cli", "templates"),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            autoescape=False,
        )
        self.env.filters["py_literal"] = repr

    def render(self, template_name: str, context: Dict[str, Any], table: Optional[str] = None) -> str:
        """Render a template with the given context.

        Args:
            template_name: Template file name (e.g. 'entity.py.j2')
            context: Variables made available to the template
            table: Table being rendered, only used in error messages

        Returns:
            Rendered text

        Raises:
            TemplateRenderError: If the template is missing or fails to render
        """
        try:
            template = self.env.get_template(template_name)
            return template.render(**context)
        except TemplateError as e:
            logger.debug("Rendering %s failed", template_name, exc_info=True)
            raise TemplateRenderError(template_name, str(e), table=table) from e
