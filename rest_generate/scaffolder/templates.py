"""Jinja2 rendering of generated Node.js sources.

Every text artifact except the JSON manifests is a ``.j2`` template under
``rest_generate/scaffolder/templates/``.  The renderer only turns a template
and a context into a string; deciding which templates apply to a project, and
where their output goes, belongs to the synthesizer.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


_PACKAGED_TEMPLATES = Path(__file__).parent / "templates"


class TemplateRenderer:
    """Loads project templates and renders them against a build context.

    Block tags are trimmed so that ``{% if %}`` lines for unselected features
    leave no blank lines behind, and a context key missing from the build
    context raises instead of rendering as an empty string.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir) if template_dir else _PACKAGED_TEMPLATES
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            # Output is JavaScript, JSON-ish config and Markdown, never HTML.
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render *template_path* (relative to the template root).

        Raises:
            jinja2.TemplateNotFound: If the template does not exist.
            jinja2.UndefinedError: If the template uses a key missing from
                *context*.
        """
        return self.env.get_template(template_path).render(**context)

    def render_each(
        self, outputs: Mapping[str, str], context: dict[str, Any]
    ) -> dict[str, str]:
        """Render several templates with one context.

        Args:
            outputs: Mapping of template path -> output path.
            context: Build context shared by every template.

        Returns:
            Mapping of output path -> rendered content, in the order of
            *outputs*.
        """
        return {
            output_path: self.render(template_path, context)
            for template_path, output_path in outputs.items()
        }

    def has_template(self, template_path: str) -> bool:
        return (self.template_dir / template_path).is_file()
