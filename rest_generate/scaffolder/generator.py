"""Main scaffolding orchestrator.

Takes a ``ProjectOptions`` and writes the generated project to disk: the
directory skeleton first, then every artifact of the synthesized file set in
order.  Existing files are overwritten; nothing is merged or rolled back.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from rest_generate.utils import ensure_dir, write_file

from .options import Feature, ProjectOptions, ensure_consistent, orm_directory
from .synthesizer import GeneratedFileSet, synthesize
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Directory layout
# ---------------------------------------------------------------------------

BASE_DIRECTORIES: tuple[str, ...] = (
    "src",
    "src/controllers",
    "src/routes",
    "src/middleware",
    "src/utils",
    "src/config",
)

TEST_DIRECTORIES: tuple[str, ...] = ("tests", "tests/unit", "tests/integration")


def directory_layout(options: ProjectOptions) -> list[str]:
    """Return the subdirectories implied by *options*, relative to the project root."""
    dirs = list(BASE_DIRECTORIES)

    if options.has_database:
        dirs.append("src/models")
        orm_dir = f"src/{orm_directory(options.orm)}"
        if orm_dir not in dirs:
            dirs.append(orm_dir)

    if options.has(Feature.AUTH):
        dirs.append("src/auth")

    if options.has(Feature.TESTS):
        dirs.extend(TEST_DIRECTORIES)

    return dirs


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Writes a generated project to disk.

    Given a ``ProjectOptions``, the generator:
    - creates the target directory (reusing it if present)
    - creates the directory skeleton concurrently
    - writes ``package.json`` (and ``tsconfig.json``)
    - writes ``.env``, ``.env.example`` and ``.gitignore``
    - writes the README, entry point, and controller/route/model stubs
    - writes Jest and Docker files when those features are selected

    Filesystem errors propagate unchanged and abort the remaining writes.
    """

    def __init__(
        self,
        options: ProjectOptions,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.options = ensure_consistent(options)
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    def plan(self) -> GeneratedFileSet:
        """Synthesize the file set without touching the file system."""
        return synthesize(self.options, self.renderer)

    async def generate(self, project_dir: str | Path) -> list[Path]:
        """Generate the project into *project_dir*.

        The file set is synthesized before any I/O, so an invalid
        configuration never leaves a partial tree behind.

        Args:
            project_dir: Target project directory (created if absent).

        Returns:
            Written file paths, in write order.
        """
        file_set = self.plan()
        root = Path(project_dir)

        # 1. Target directory
        await asyncio.to_thread(ensure_dir, root)

        # 2. Skeleton directories
        await self._create_directory_structure(root)

        # 3-5. Manifests, env/ignore files, then docs and sources
        return await self._write_files(root, file_set)

    # -- Directory structure -----------------------------------------------

    async def _create_directory_structure(self, root: Path) -> None:
        """Create the project directory tree."""
        dirs = directory_layout(self.options)

        async def _mkdir(d: str) -> None:
            await asyncio.to_thread(ensure_dir, root / d)

        await asyncio.gather(*[_mkdir(d) for d in dirs])

    # -- File writes -------------------------------------------------------

    async def _write_files(self, root: Path, file_set: GeneratedFileSet) -> list[Path]:
        """Write every artifact sequentially, overwriting existing files."""
        written: list[Path] = []
        for generated in file_set:
            out = root / generated.path
            await asyncio.to_thread(write_file, out, generated.content)
            written.append(out)
        return written


async def generate_project(project_dir: str | Path, options: ProjectOptions) -> list[Path]:
    """Convenience wrapper around :meth:`ProjectGenerator.generate`."""
    return await ProjectGenerator(options).generate(project_dir)
