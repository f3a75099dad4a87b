"""File content synthesis.

Turns a :class:`ProjectOptions` into a :class:`GeneratedFileSet`: the ordered
list of ``(relative path, content)`` pairs that make up a generated project.
Each artifact comes from its own method on :class:`FileSynthesizer`; the
methods read only the options, never each other's output, and never touch
the file system.  Unselected features contribute nothing to any artifact.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from .dependencies import resolve_dependencies
from .docker_gen import DockerGenerator
from .options import (
    ORM,
    AuthStrategy,
    Database,
    Feature,
    Framework,
    InvalidConfigurationError,
    ProjectOptions,
    ensure_consistent,
)
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Defaults baked into generated files
# ---------------------------------------------------------------------------

DEFAULT_PORT = 3000
DEFAULT_NODE_ENV = "development"
MANIFEST_VERSION = "1.0.0"
MANIFEST_DESCRIPTION = "A Node.js REST API"

GITIGNORE_CONTENT = "node_modules\ndist\n.env\n"

# Connection string templates keyed by database; ``{name}`` is the project name.
_DATABASE_URLS: dict[Database, str] = {
    Database.MONGODB: "mongodb://localhost:27017/{name}",
}

_ROUTE_TEMPLATES: dict[Framework, str] = {
    Framework.EXPRESS: "routes/express.j2",
}

# ORMs without an entry fall back to the plain data-shape model.
_MODEL_TEMPLATES: dict[ORM, str] = {
    ORM.MONGOOSE: "models/mongoose.j2",
}
_FALLBACK_MODEL_TEMPLATE = "models/plain.j2"

_TSCONFIG: dict[str, Any] = {
    "compilerOptions": {
        "target": "ES2020",
        "module": "NodeNext",
        "moduleResolution": "NodeNext",
        "esModuleInterop": True,
        "strict": True,
        "outDir": "./dist",
        "rootDir": "./src",
        "resolveJsonModule": True,
        "skipLibCheck": True,
        "forceConsistentCasingInFileNames": True,
    },
    "include": ["src/**/*"],
    "exclude": ["node_modules", "**/*.test.ts", "dist"],
}


# ---------------------------------------------------------------------------
# Generated file models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GeneratedFile:
    """A single artifact: POSIX path relative to the project root plus content."""

    path: str
    content: str = ""

    def __post_init__(self) -> None:
        parts = self.path.split("/")
        if not self.path or self.path.startswith("/") or ".." in parts:
            raise ValueError(f"Generated file path must be relative: {self.path!r}")


@dataclass
class GeneratedFileSet:
    """Every artifact of one generation run, in write order.

    Paths are unique within a set.
    """

    files: list[GeneratedFile] = field(default_factory=list)

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for f in self.files:
            if f.path in seen:
                raise ValueError(f"Duplicate generated file path: {f.path}")
            seen.add(f.path)

    def __iter__(self) -> Iterator[GeneratedFile]:
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)

    def __contains__(self, path: object) -> bool:
        return any(f.path == path for f in self.files)

    @property
    def paths(self) -> list[str]:
        return [f.path for f in self.files]

    def get(self, path: str) -> Optional[GeneratedFile]:
        """Return the file at *path*, or ``None``."""
        for f in self.files:
            if f.path == path:
                return f
        return None

    def content(self, path: str) -> str:
        """Return the content of *path*; raises ``KeyError`` if absent."""
        found = self.get(path)
        if found is None:
            raise KeyError(path)
        return found.content


# ---------------------------------------------------------------------------
# Synthesizer
# ---------------------------------------------------------------------------

class FileSynthesizer:
    """Produces the content of every generated artifact for one configuration.

    Construction validates the options and checks that the renderer holds
    the route and model templates they select; each public method returns the
    artifact(s) of one kind, or ``None`` / an empty list when the options do
    not call for that artifact.
    """

    def __init__(
        self,
        options: ProjectOptions,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.options = ensure_consistent(options)
        self.renderer = renderer or TemplateRenderer()
        self.docker_gen = DockerGenerator(self.renderer)
        self.context = build_context(options)
        self._route_template = self._select_template(
            "framework", self.options.framework, _ROUTE_TEMPLATES.get(self.options.framework)
        )
        self._model_template: Optional[str] = None
        if self.options.has_database:
            self._model_template = self._select_template(
                "orm",
                self.options.orm,
                _MODEL_TEMPLATES.get(self.options.orm, _FALLBACK_MODEL_TEMPLATE),
            )

    def _select_template(self, field_name: str, value: Any, template: Optional[str]) -> str:
        """Return *template*, or raise if it is unmapped or missing from the renderer."""
        if template is None:
            raise InvalidConfigurationError([f"{field_name}={value.value} has no template"])
        if not self.renderer.has_template(template):
            raise InvalidConfigurationError(
                [f"{field_name}={value.value} template {template} not found "
                 f"in {self.renderer.template_dir}"]
            )
        return template

    def synthesize(self) -> GeneratedFileSet:
        """Return every artifact in write order.

        Manifest files come first, then the environment and ignore files,
        then documentation and source stubs.
        """
        files: list[GeneratedFile] = [self.package_json()]
        tsconfig = self.tsconfig()
        if tsconfig is not None:
            files.append(tsconfig)
        files.extend(self.env_files())
        files.append(self.gitignore())
        files.append(self.readme())
        files.append(self.entry_point())
        files.append(self.controller())
        files.append(self.routes())
        model = self.model()
        if model is not None:
            files.append(model)
        jest_config = self.jest_config()
        if jest_config is not None:
            files.append(jest_config)
        files.extend(self.docker_files())
        return GeneratedFileSet(files=files)

    # -- Manifests ---------------------------------------------------------

    def package_json(self) -> GeneratedFile:
        """``package.json`` with scripts and the resolved dependencies."""
        opts = self.options
        runtime, development = resolve_dependencies(opts)
        ext = opts.source_extension
        main = "dist/index.js" if opts.is_typescript else "src/index.js"

        if opts.is_typescript:
            dev_script = f"ts-node-dev --respawn --transpile-only src/index.{ext}"
            build_script = "tsc"
        else:
            dev_script = f"nodemon src/index.{ext}"
            build_script = 'echo "No build step needed for JavaScript"'

        test_script = "jest" if opts.has(Feature.TESTS) else 'echo "No tests configured"'

        manifest = {
            "name": opts.name,
            "version": MANIFEST_VERSION,
            "description": MANIFEST_DESCRIPTION,
            "type": "module",
            "main": main,
            "scripts": {
                "start": f"node {main}",
                "dev": dev_script,
                "build": build_script,
                "test": test_script,
            },
            "dependencies": runtime,
            "devDependencies": development,
        }
        return GeneratedFile(path="package.json", content=_to_json(manifest))

    def tsconfig(self) -> Optional[GeneratedFile]:
        """``tsconfig.json`` for TypeScript projects."""
        if not self.options.is_typescript:
            return None
        return GeneratedFile(path="tsconfig.json", content=_to_json(_TSCONFIG))

    # -- Environment / VCS -------------------------------------------------

    def env_files(self) -> list[GeneratedFile]:
        """``.env`` and ``.env.example`` with identical content."""
        content = self.renderer.render("env.j2", self.context)
        return [
            GeneratedFile(path=".env", content=content),
            GeneratedFile(path=".env.example", content=content),
        ]

    def gitignore(self) -> GeneratedFile:
        return GeneratedFile(path=".gitignore", content=GITIGNORE_CONTENT)

    # -- Documentation -----------------------------------------------------

    def readme(self) -> GeneratedFile:
        return GeneratedFile(
            path="README.md",
            content=self.renderer.render("README.md.j2", self.context),
        )

    # -- Source stubs ------------------------------------------------------

    def entry_point(self) -> GeneratedFile:
        """``src/index.<ext>``: imports, middleware, auth, swagger and server start."""
        return GeneratedFile(
            path=f"src/index.{self.options.source_extension}",
            content=self.renderer.render("index.j2", self.context),
        )

    def controller(self) -> GeneratedFile:
        return GeneratedFile(
            path=f"src/controllers/example.controller.{self.options.source_extension}",
            content=self.renderer.render("controller.j2", self.context),
        )

    def routes(self) -> GeneratedFile:
        """Router exposing the example endpoints, shaped for the framework."""
        return GeneratedFile(
            path=f"src/routes/example.routes.{self.options.source_extension}",
            content=self.renderer.render(self._route_template, self.context),
        )

    def model(self) -> Optional[GeneratedFile]:
        """Example model keyed by ORM; omitted when there is no database."""
        if self._model_template is None:
            return None
        return GeneratedFile(
            path=f"src/models/example.model.{self.options.source_extension}",
            content=self.renderer.render(self._model_template, self.context),
        )

    # -- Feature extras ----------------------------------------------------

    def jest_config(self) -> Optional[GeneratedFile]:
        if not self.options.has(Feature.TESTS):
            return None
        return GeneratedFile(
            path="jest.config.js",
            content=self.renderer.render("jest.config.js.j2", self.context),
        )

    def docker_files(self) -> list[GeneratedFile]:
        if not self.options.has(Feature.DOCKER):
            return []
        return [
            GeneratedFile(path=path, content=content)
            for path, content in self.docker_gen.render_all(self.context).items()
        ]


# ---------------------------------------------------------------------------
# Module-level API
# ---------------------------------------------------------------------------

def synthesize(
    options: ProjectOptions,
    renderer: TemplateRenderer | None = None,
) -> GeneratedFileSet:
    """Return the complete :class:`GeneratedFileSet` for *options*.

    Raises:
        InvalidConfigurationError: If *options* is inconsistent or selects a
            value with no template.
    """
    return FileSynthesizer(options, renderer).synthesize()


def build_context(options: ProjectOptions) -> dict[str, Any]:
    """Build the Jinja2 template context from the project options."""
    auth = options.has(Feature.AUTH)
    strategy = options.auth_strategy if auth else None
    validation_library = options.validation_library if options.has(Feature.VALIDATION) else None
    ts = options.is_typescript

    return {
        "project_name": options.name,
        "typescript": ts,
        "ext": options.source_extension,
        "framework": options.framework.value,
        "database": options.database.value,
        "has_database": options.has_database,
        "mongodb": options.database is Database.MONGODB,
        "database_url": database_url(options),
        "orm": options.orm.value,
        "auth": auth,
        "auth_strategy": strategy.value if strategy else "",
        "session_auth": strategy is AuthStrategy.SESSION,
        "validation": validation_library is not None,
        "validation_library": validation_library.value if validation_library else "",
        "swagger": options.has(Feature.SWAGGER),
        "docker": options.has(Feature.DOCKER),
        "tests": options.has(Feature.TESTS),
        "port": DEFAULT_PORT,
        "node_env": DEFAULT_NODE_ENV,
        "request_type": ": Request" if ts else "",
        "response_type": ": Response" if ts else "",
    }


def database_url(options: ProjectOptions) -> str:
    """Default connection string for the selected database (empty for none)."""
    template = _DATABASE_URLS.get(options.database)
    if template is None:
        return ""
    return template.format(name=options.name)


def _to_json(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=2) + "\n"
