"""Template rendering context for HTML fragments.

A single ``RenderContext`` is built at start-up and handed to every component
that renders markup. Construction compiles every packaged template so broken
templates fail the run before any fragment is written.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
    select_autoescape,
)
from markupsafe import Markup

from refdocs.core.exceptions import TemplateRenderError, TemplateSetupError
from refdocs.docgen.links import make_anchor

TEMPLATES_DIR = Path(__file__).parent / "templates"


@dataclass(frozen=True)
class RenderContext:
    """Immutable wrapper around a configured Jinja2 environment."""

    environment: Environment

    @classmethod
    def create(cls, template_dir: Path | None = None) -> RenderContext:
        """Build the environment and compile every template.

        Raises:
            TemplateSetupError: If the directory is missing or a template is invalid
        """
        directory = template_dir or TEMPLATES_DIR
        if not directory.is_dir():
            raise TemplateSetupError(f"Template directory not found: {directory}")

        environment = Environment(
            loader=FileSystemLoader(str(directory)),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        environment.filters["anchor"] = make_anchor

        for name in environment.list_templates():
            try:
                environment.get_template(name)
            except TemplateError as e:
                raise TemplateSetupError(f"Invalid template {name}: {e}") from e

        return cls(environment=environment)

    def render(self, template_name: str, data: dict[str, Any]) -> Markup:
        """Render ``template_name`` with ``data`` into markup.

        Raises:
            TemplateRenderError: On an unknown template or a data-shape mismatch
        """
        try:
            template = self.environment.get_template(template_name)
            return Markup(template.render(**data))
        except TemplateNotFound as e:
            raise TemplateRenderError(template_name, f"template not found: {e}") from e
        except TemplateError as e:
            raise TemplateRenderError(template_name, str(e)) from e
