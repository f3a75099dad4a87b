"""Container files for the ``docker`` feature.

``Dockerfile`` installs and (for TypeScript) builds the service on
``node:20-alpine``; ``docker-compose.yml`` runs it on the default port and,
when the project uses MongoDB, adds a ``mongo`` service with a named volume
and points ``MONGODB_URI`` at it.
"""

from __future__ import annotations

from typing import Any

from .templates import TemplateRenderer

# Template path -> path in the generated project.  Order is write order.
DOCKER_OUTPUTS: dict[str, str] = {
    "docker/Dockerfile.j2": "Dockerfile",
    "docker/dockerignore.j2": ".dockerignore",
    "docker/docker-compose.yml.j2": "docker-compose.yml",
}


class DockerGenerator:
    """Renders the container files of a generated project."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def render_all(self, context: dict[str, Any]) -> dict[str, str]:
        """Return ``{output path: content}`` for every container file.

        *context* is the synthesizer's build context; the templates read
        ``port``, ``project_name``, ``typescript`` and ``mongodb``.
        """
        return self.renderer.render_each(DOCKER_OUTPUTS, context)
