"""Option universe and the resolved project configuration.

Every option family is a ``str`` enum.  Some values are *reserved*: they name
a framework, database, or ORM the generator is meant to support eventually,
but no dependency set or file template exists for them yet.  Reserved values
are never offered by the prompts and never pass :func:`is_consistent`.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from rest_generate.utils import validate_project_name


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Language(str, Enum):
    """Source language of the generated service."""
    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"


class Framework(str, Enum):
    """HTTP framework."""
    EXPRESS = "express"
    FASTIFY = "fastify"
    KOA = "koa"


class Database(str, Enum):
    """Backing database."""
    MONGODB = "mongodb"
    POSTGRES = "postgres"
    MYSQL = "mysql"
    SQLITE = "sqlite"
    NONE = "none"


class ORM(str, Enum):
    """ORM/ODM layered on top of the database."""
    MONGOOSE = "mongoose"
    PRISMA = "prisma"
    SEQUELIZE = "sequelize"
    TYPEORM = "typeorm"
    DRIZZLE = "drizzle"
    NONE = "none"


class Feature(str, Enum):
    """Optional add-ons."""
    AUTH = "auth"
    VALIDATION = "validation"
    SWAGGER = "swagger"
    DOCKER = "docker"
    TESTS = "tests"


class ValidationLibrary(str, Enum):
    JOI = "joi"
    ZOD = "zod"


class AuthStrategy(str, Enum):
    JWT = "jwt"
    SESSION = "session"
    OAUTH = "oauth"


# ---------------------------------------------------------------------------
# Reserved variants and legal combinations
# ---------------------------------------------------------------------------

RESERVED_FRAMEWORKS: frozenset[Framework] = frozenset({Framework.FASTIFY, Framework.KOA})
RESERVED_DATABASES: frozenset[Database] = frozenset(
    {Database.POSTGRES, Database.MYSQL, Database.SQLITE}
)
RESERVED_ORMS: frozenset[ORM] = frozenset(
    {ORM.PRISMA, ORM.SEQUELIZE, ORM.TYPEORM, ORM.DRIZZLE}
)

# Database -> ORMs that may be paired with it.
COMPATIBLE_ORMS: dict[Database, tuple[ORM, ...]] = {
    Database.MONGODB: (ORM.MONGOOSE,),
    Database.POSTGRES: (ORM.PRISMA, ORM.SEQUELIZE, ORM.TYPEORM, ORM.DRIZZLE),
    Database.MYSQL: (ORM.PRISMA, ORM.SEQUELIZE, ORM.TYPEORM, ORM.DRIZZLE),
    Database.SQLITE: (ORM.PRISMA, ORM.SEQUELIZE, ORM.TYPEORM, ORM.DRIZZLE),
    Database.NONE: (ORM.NONE,),
}

# Directory under ``src/`` that holds ORM-specific declarations.
ORM_DIRECTORIES: dict[ORM, str] = {
    ORM.MONGOOSE: "schemas",
}
DEFAULT_ORM_DIRECTORY = "models"


def available_frameworks() -> list[Framework]:
    """Frameworks that can actually be generated."""
    return [f for f in Framework if f not in RESERVED_FRAMEWORKS]


def available_databases() -> list[Database]:
    """Databases that can actually be generated."""
    return [d for d in Database if d not in RESERVED_DATABASES]


def available_orms(database: Database) -> list[ORM]:
    """Implemented ORMs that are legal for *database*."""
    return [o for o in COMPATIBLE_ORMS.get(database, ()) if o not in RESERVED_ORMS]


def orm_directory(orm: ORM) -> str:
    """Return the ``src/`` subdirectory name for *orm* (``models`` fallback)."""
    return ORM_DIRECTORIES.get(orm, DEFAULT_ORM_DIRECTORY)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class InvalidConfigurationError(ValueError):
    """Raised when an option combination cannot be generated.

    Attributes:
        problems: One human-readable entry per offending field combination.
    """

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        super().__init__("Invalid project configuration: " + "; ".join(self.problems))


# ---------------------------------------------------------------------------
# Resolved configuration
# ---------------------------------------------------------------------------

class ProjectOptions(BaseModel):
    """Every user-selected option for one generation run.

    Instances are immutable.  Construction validates the option invariants, so
    a ``ProjectOptions`` obtained normally is always consistent; instances
    built with ``model_construct`` skip that check and are re-validated by the
    resolver and synthesizer.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Project name (directory and package name)")
    language: Language = Field(default=Language.TYPESCRIPT)
    framework: Framework = Field(default=Framework.EXPRESS)
    database: Database = Field(default=Database.MONGODB)
    orm: ORM = Field(default=ORM.MONGOOSE)
    features: frozenset[Feature] = Field(default_factory=frozenset)
    validation_library: Optional[ValidationLibrary] = Field(
        default=None, description="Required iff the validation feature is selected"
    )
    auth_strategy: Optional[AuthStrategy] = Field(
        default=None, description="Required iff the auth feature is selected"
    )

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return validate_project_name(value)

    @model_validator(mode="after")
    def _check_consistency(self) -> "ProjectOptions":
        problems = consistency_problems(self)
        if problems:
            raise ValueError("; ".join(problems))
        return self

    # -- Convenience predicates --------------------------------------------

    def has(self, feature: Feature) -> bool:
        """Return ``True`` if *feature* is selected."""
        return feature in self.features

    @property
    def is_typescript(self) -> bool:
        return self.language is Language.TYPESCRIPT

    @property
    def has_database(self) -> bool:
        return self.database is not Database.NONE

    @property
    def source_extension(self) -> str:
        """File extension for generated source files (``ts`` or ``js``)."""
        return "ts" if self.is_typescript else "js"

    def sorted_features(self) -> list[Feature]:
        """Features in declaration order, independent of selection order."""
        return [f for f in Feature if f in self.features]


# ---------------------------------------------------------------------------
# Consistency predicate
# ---------------------------------------------------------------------------

def consistency_problems(options: ProjectOptions) -> list[str]:
    """List every violated invariant of *options* (empty when consistent)."""
    problems: list[str] = []
    features = options.features

    if options.framework in RESERVED_FRAMEWORKS:
        problems.append(f"framework={options.framework.value} is reserved and not yet implemented")
    if options.database in RESERVED_DATABASES:
        problems.append(f"database={options.database.value} is reserved and not yet implemented")
    if options.orm in RESERVED_ORMS:
        problems.append(f"orm={options.orm.value} is reserved and not yet implemented")

    if options.orm not in COMPATIBLE_ORMS.get(options.database, ()):
        problems.append(
            f"orm={options.orm.value} is not compatible with database={options.database.value}"
        )

    has_validation = Feature.VALIDATION in features
    if has_validation and options.validation_library is None:
        problems.append("features includes validation but validation_library is not set")
    if not has_validation and options.validation_library is not None:
        problems.append(
            f"validation_library={options.validation_library.value} "
            "is set but features does not include validation"
        )

    has_auth = Feature.AUTH in features
    if has_auth and options.auth_strategy is None:
        problems.append("features includes auth but auth_strategy is not set")
    if not has_auth and options.auth_strategy is not None:
        problems.append(
            f"auth_strategy={options.auth_strategy.value} "
            "is set but features does not include auth"
        )

    return problems


def is_consistent(options: ProjectOptions) -> bool:
    """Return ``True`` if *options* can be generated."""
    return not consistency_problems(options)


def ensure_consistent(options: ProjectOptions) -> ProjectOptions:
    """Return *options* unchanged or raise :class:`InvalidConfigurationError`."""
    problems = consistency_problems(options)
    if problems:
        raise InvalidConfigurationError(problems)
    return options
