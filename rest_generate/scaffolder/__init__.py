"""rest-generate scaffolder -- generates Node.js REST API project trees.

This package takes a ``ProjectOptions`` (language, framework, database, ORM,
features) and renders a project directory with a ``package.json``, env files,
an entry point, and example controller/route/model stubs.

Quick usage::

    from rest_generate.scaffolder import ProjectGenerator, ProjectOptions

    options = ProjectOptions(
        name="my-api",
        language="typescript",
        database="mongodb",
        orm="mongoose",
        features=["auth"],
        auth_strategy="jwt",
    )
    written = await ProjectGenerator(options).generate("./my-api")
"""

from rest_generate.scaffolder.dependencies import resolve_dependencies
from rest_generate.scaffolder.generator import ProjectGenerator, directory_layout, generate_project
from rest_generate.scaffolder.options import (
    ORM,
    AuthStrategy,
    Database,
    Feature,
    Framework,
    InvalidConfigurationError,
    Language,
    ProjectOptions,
    ValidationLibrary,
    is_consistent,
)
from rest_generate.scaffolder.synthesizer import GeneratedFile, GeneratedFileSet, synthesize
from rest_generate.scaffolder.templates import TemplateRenderer

__all__ = [
    "ORM",
    "AuthStrategy",
    "Database",
    "Feature",
    "Framework",
    "GeneratedFile",
    "GeneratedFileSet",
    "InvalidConfigurationError",
    "Language",
    "ProjectGenerator",
    "ProjectOptions",
    "TemplateRenderer",
    "ValidationLibrary",
    "directory_layout",
    "generate_project",
    "is_consistent",
    "resolve_dependencies",
    "synthesize",
]
