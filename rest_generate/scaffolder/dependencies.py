"""Dependency resolution for the generated ``package.json``.

Maps a :class:`ProjectOptions` to two manifests, runtime and development, each
a ``{package: version specifier}`` dict.  Every option value that is not
reserved has an entry in the lookup tables below; a missing entry means the
option combination is not implemented and raises
:class:`InvalidConfigurationError`.
"""

from __future__ import annotations

from .options import (
    ORM,
    AuthStrategy,
    Database,
    Feature,
    Framework,
    InvalidConfigurationError,
    Language,
    ProjectOptions,
    ValidationLibrary,
    ensure_consistent,
)

LATEST = "latest"

# ---------------------------------------------------------------------------
# Runtime dependency tables
# ---------------------------------------------------------------------------

# Framework package plus the cross-origin / security-header / request-log trio.
_FRAMEWORK_DEPENDENCIES: dict[Framework, tuple[str, ...]] = {
    Framework.EXPRESS: ("express", "cors", "helmet", "morgan"),
}

_DATABASE_DEPENDENCIES: dict[Database, tuple[str, ...]] = {
    Database.MONGODB: ("mongodb",),
    Database.NONE: (),
}

_ORM_DEPENDENCIES: dict[ORM, tuple[str, ...]] = {
    ORM.MONGOOSE: ("mongoose",),
    ORM.NONE: (),
}

_AUTH_BASE_DEPENDENCIES: tuple[str, ...] = ("passport", "express-session", "bcrypt")

_AUTH_STRATEGY_DEPENDENCIES: dict[AuthStrategy, tuple[str, ...]] = {
    AuthStrategy.JWT: ("passport-jwt", "jsonwebtoken"),
    AuthStrategy.SESSION: ("passport-local",),
    AuthStrategy.OAUTH: ("passport-google-oauth20", "passport-github2"),
}

# Session store adapter per database; no adapter means the in-memory store.
_SESSION_STORE_DEPENDENCIES: dict[Database, tuple[str, ...]] = {
    Database.MONGODB: ("connect-mongo",),
    Database.NONE: (),
}

_VALIDATION_DEPENDENCIES: dict[ValidationLibrary, tuple[str, ...]] = {
    ValidationLibrary.JOI: ("joi",),
    ValidationLibrary.ZOD: ("zod",),
}

_SWAGGER_DEPENDENCIES: tuple[str, ...] = ("swagger-jsdoc", "swagger-ui-express")

# ---------------------------------------------------------------------------
# Development dependency tables
# ---------------------------------------------------------------------------

_TYPESCRIPT_TOOLING: dict[str, str] = {
    "typescript": "^5.2.2",
    "ts-node": "^10.9.1",
    "ts-node-dev": "^2.0.0",
    "nodemon": "^3.0.1",
    "tsconfig-paths": "^4.2.0",
    "rimraf": "^5.0.1",
    "eslint": "^8.49.0",
    "@typescript-eslint/eslint-plugin": "^6.7.2",
    "@typescript-eslint/parser": "^6.7.2",
    "prettier": "^3.0.3",
}

_JAVASCRIPT_TOOLING: dict[str, str] = {
    "nodemon": "^3.0.1",
    "eslint": "^8.49.0",
    "prettier": "^3.0.3",
}

_LANGUAGE_TOOLING: dict[Language, dict[str, str]] = {
    Language.TYPESCRIPT: _TYPESCRIPT_TOOLING,
    Language.JAVASCRIPT: _JAVASCRIPT_TOOLING,
}

# Runtime packages that do not bundle their own type declarations.
_TYPE_DEFINITIONS: dict[str, str] = {
    "express": "^4.17.21",
    "cors": "^2.8.17",
    "morgan": "^1.9.9",
    "passport": "^1.0.16",
    "express-session": "^1.17.10",
    "bcrypt": "^5.0.2",
    "passport-jwt": "^3.0.13",
    "jsonwebtoken": "^9.0.5",
    "passport-local": "^1.0.38",
    "passport-google-oauth20": "^2.0.14",
    "passport-github2": "^1.2.9",
    "swagger-jsdoc": "^6.0.4",
    "swagger-ui-express": "^4.1.6",
}

_TEST_RUNNER: dict[str, str] = {"jest": "^29.7.0"}
_TEST_RUNNER_TYPESCRIPT: dict[str, str] = {"ts-jest": "^29.1.1", "@types/jest": "^29.5.5"}

# HTTP-testing helper per framework, with its TypeScript declarations.
_HTTP_TEST_HELPERS: dict[Framework, dict[str, str]] = {
    Framework.EXPRESS: {"supertest": "^6.3.3"},
}
_HTTP_TEST_HELPER_TYPES: dict[Framework, dict[str, str]] = {
    Framework.EXPRESS: {"@types/supertest": "^2.0.12"},
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def resolve_dependencies(
    options: ProjectOptions,
) -> tuple[dict[str, str], dict[str, str]]:
    """Return ``(runtime, development)`` dependency manifests for *options*.

    Both dicts are sorted by package name so the generated manifest is
    byte-identical across runs.

    Raises:
        InvalidConfigurationError: If *options* is inconsistent or selects a
            value with no dependency mapping.
    """
    ensure_consistent(options)
    runtime = resolve_runtime_dependencies(options)
    development = resolve_dev_dependencies(options, runtime)
    return runtime, development


def resolve_runtime_dependencies(options: ProjectOptions) -> dict[str, str]:
    """Runtime ``dependencies`` for *options*."""
    names: list[str] = ["dotenv"]
    if options.is_typescript:
        names.append("@types/node")

    names.extend(_lookup(_FRAMEWORK_DEPENDENCIES, options.framework, "framework"))
    names.extend(_lookup(_DATABASE_DEPENDENCIES, options.database, "database"))
    names.extend(_lookup(_ORM_DEPENDENCIES, options.orm, "orm"))

    if options.has(Feature.AUTH):
        names.extend(_AUTH_BASE_DEPENDENCIES)
        strategy = options.auth_strategy
        names.extend(_lookup(_AUTH_STRATEGY_DEPENDENCIES, strategy, "auth_strategy"))
        if strategy is AuthStrategy.SESSION:
            names.extend(_lookup(_SESSION_STORE_DEPENDENCIES, options.database, "database"))

    if options.has(Feature.VALIDATION):
        names.extend(
            _lookup(_VALIDATION_DEPENDENCIES, options.validation_library, "validation_library")
        )

    if options.has(Feature.SWAGGER):
        names.extend(_SWAGGER_DEPENDENCIES)

    return {name: LATEST for name in sorted(set(names))}


def resolve_dev_dependencies(
    options: ProjectOptions,
    runtime: dict[str, str] | None = None,
) -> dict[str, str]:
    """Development ``devDependencies`` for *options*.

    *runtime* is the runtime manifest used to decide which ``@types/*``
    packages a TypeScript project needs; it is resolved when omitted.
    """
    if runtime is None:
        runtime = resolve_runtime_dependencies(options)

    dev: dict[str, str] = dict(_lookup(_LANGUAGE_TOOLING, options.language, "language"))

    if options.is_typescript:
        for package in runtime:
            if package in _TYPE_DEFINITIONS:
                dev[f"@types/{package}"] = _TYPE_DEFINITIONS[package]

    if options.has(Feature.TESTS):
        dev.update(_TEST_RUNNER)
        dev.update(_lookup(_HTTP_TEST_HELPERS, options.framework, "framework"))
        if options.is_typescript:
            dev.update(_TEST_RUNNER_TYPESCRIPT)
            dev.update(_lookup(_HTTP_TEST_HELPER_TYPES, options.framework, "framework"))

    return dict(sorted(dev.items()))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _lookup(table: dict, key, field: str):
    """Return ``table[key]`` or raise naming the unsupported *field* value."""
    try:
        return table[key]
    except KeyError:
        value = getattr(key, "value", key)
        raise InvalidConfigurationError(
            [f"{field}={value} has no dependency mapping"]
        ) from None
