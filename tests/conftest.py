"""Shared pytest fixtures for the rest-generate test suite.

Provides reusable fixtures for:
- An options factory with sensible defaults
- The canonical configurations used across scaffolder tests
- A real TemplateRenderer pointed at the packaged templates
- Temporary project directories
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from rest_generate.scaffolder.options import ProjectOptions
from rest_generate.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Option factories
# ---------------------------------------------------------------------------

@pytest.fixture
def make_options() -> Callable[..., ProjectOptions]:
    """Factory returning a validated ``ProjectOptions``.

    Defaults to ``demo``, TypeScript, Express, MongoDB + Mongoose, no features.
    """

    def _make(**overrides: Any) -> ProjectOptions:
        fields: dict[str, Any] = {
            "name": "demo",
            "language": "typescript",
            "framework": "express",
            "database": "mongodb",
            "orm": "mongoose",
            "features": [],
        }
        fields.update(overrides)
        return ProjectOptions(**fields)

    return _make


@pytest.fixture
def ts_mongo_options(make_options) -> ProjectOptions:
    """TypeScript + Express + MongoDB/Mongoose, no features."""
    return make_options()


@pytest.fixture
def js_plain_options(make_options) -> ProjectOptions:
    """JavaScript + Express, no database, no features."""
    return make_options(language="javascript", database="none", orm="none")


@pytest.fixture
def full_options(make_options) -> ProjectOptions:
    """Every feature selected, session auth and zod validation."""
    return make_options(
        features=["auth", "validation", "swagger", "docker", "tests"],
        auth_strategy="session",
        validation_library="zod",
    )


def all_consistent_options() -> list[ProjectOptions]:
    """Every configuration the option collector can produce for ``demo``."""
    from itertools import combinations

    from rest_generate.scaffolder.options import (
        AuthStrategy,
        Feature,
        Language,
        ValidationLibrary,
        available_databases,
        available_frameworks,
        available_orms,
    )

    all_features = list(Feature)
    feature_sets = [
        set(combo)
        for size in range(len(all_features) + 1)
        for combo in combinations(all_features, size)
    ]

    results: list[ProjectOptions] = []
    for language in Language:
        for framework in available_frameworks():
            for database in available_databases():
                for orm in available_orms(database):
                    for features in feature_sets:
                        validations = (
                            list(ValidationLibrary) if Feature.VALIDATION in features else [None]
                        )
                        strategies = (
                            list(AuthStrategy) if Feature.AUTH in features else [None]
                        )
                        for validation in validations:
                            for strategy in strategies:
                                results.append(
                                    ProjectOptions(
                                        name="demo",
                                        language=language,
                                        framework=framework,
                                        database=database,
                                        orm=orm,
                                        features=features,
                                        validation_library=validation,
                                        auth_strategy=strategy,
                                    )
                                )
    return results


@pytest.fixture(scope="session")
def every_options() -> list[ProjectOptions]:
    """All collector-reachable configurations (a few hundred)."""
    return all_consistent_options()


# ---------------------------------------------------------------------------
# Rendering & paths
# ---------------------------------------------------------------------------

@pytest.fixture
def renderer() -> TemplateRenderer:
    """A TemplateRenderer using the packaged templates."""
    return TemplateRenderer()


@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Target directory for a generated project (not created yet)."""
    return tmp_path / "demo"
