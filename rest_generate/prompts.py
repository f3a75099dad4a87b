"""Interactive option collection.

Asks the user for every project option with ``rich.prompt``, in a fixed
order, offering only implemented values and conditioning later questions on
earlier answers (ORM on database, validation library on the validation
feature, auth strategy on the auth feature).  Answers supplied up front (for
example from command-line flags) are used without asking.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Optional

from rich.prompt import Confirm, Prompt

from rest_generate.scaffolder.options import (
    AuthStrategy,
    Database,
    Feature,
    Language,
    ProjectOptions,
    ValidationLibrary,
    available_databases,
    available_frameworks,
    available_orms,
)
from rest_generate.utils import console, print_error, print_info

FEATURE_LABELS: dict[Feature, str] = {
    Feature.AUTH: "Authentication (Passport)",
    Feature.VALIDATION: "Validation",
    Feature.SWAGGER: "Swagger/OpenAPI Documentation",
    Feature.DOCKER: "Docker",
    Feature.TESTS: "Testing (Jest)",
}


def parse_features(text: str) -> list[Feature]:
    """Parse a comma- or space-separated feature list.

    Order and duplicates are irrelevant; an empty string means no features.

    Raises:
        ValueError: If any entry is not a known feature.
    """
    names = [n for n in re.split(r"[,\s]+", text.strip().lower()) if n]
    known = {f.value: f for f in Feature}
    unknown = [n for n in names if n not in known]
    if unknown:
        raise ValueError(
            f"Unknown feature(s): {', '.join(unknown)} "
            f"(choose from {', '.join(known)})"
        )
    selected = {known[n] for n in names}
    return [f for f in Feature if f in selected]


def confirm_overwrite(project_dir: Path) -> bool:
    """Ask whether to continue into an existing directory (default: no)."""
    return Confirm.ask(
        f"Directory {project_dir.name} already exists. Continue? This may overwrite files.",
        default=False,
        console=console,
    )


def collect_options(name: str, preset: Optional[dict[str, Any]] = None) -> ProjectOptions:
    """Collect a complete, validated ``ProjectOptions`` for *name*.

    Args:
        name: Project name (already validated by the caller).
        preset: Answers keyed by ``ProjectOptions`` field name.  A present,
            non-``None`` entry skips the corresponding question.

    Returns:
        An immutable ``ProjectOptions``.
    """
    preset = {k: v for k, v in (preset or {}).items() if v is not None}

    language = preset.get("language") or _select(
        "Select a language", [lang.value for lang in Language]
    )
    framework = preset.get("framework") or _select(
        "Select a backend framework", [f.value for f in available_frameworks()]
    )
    database = preset.get("database") or _select(
        "Select a database", [d.value for d in available_databases()]
    )

    orm = preset.get("orm")
    if orm is None:
        orm_choices = [o.value for o in available_orms(Database(_value_of(database)))]
        if len(orm_choices) == 1:
            orm = orm_choices[0]
            print_info(f"Using ORM/ODM: {orm}")
        else:
            orm = _select("Select an ORM/ODM", orm_choices)

    features = preset.get("features")
    if features is None:
        features = _select_features()

    selected = {Feature(_value_of(f)) for f in features}

    validation_library = None
    if Feature.VALIDATION in selected:
        validation_library = preset.get("validation_library") or _select(
            "Select a validation library", [v.value for v in ValidationLibrary]
        )

    auth_strategy = None
    if Feature.AUTH in selected:
        auth_strategy = preset.get("auth_strategy") or _select(
            "Select an authentication strategy", [s.value for s in AuthStrategy]
        )

    return ProjectOptions(
        name=name,
        language=language,
        framework=framework,
        database=database,
        orm=orm,
        features=selected,
        validation_library=validation_library,
        auth_strategy=auth_strategy,
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _select(message: str, choices: list[str]) -> str:
    """Ask for one of *choices*; the first choice is the default."""
    return Prompt.ask(message, choices=choices, default=choices[0], console=console)


def _select_features() -> list[Feature]:
    """Ask for a comma-separated feature list until it parses."""
    console.print("Available features:")
    for feature, label in FEATURE_LABELS.items():
        console.print(f"  [cyan]{feature.value}[/cyan]  {label}")
    while True:
        answer = Prompt.ask(
            "Select additional features (comma-separated, empty for none)",
            default="",
            show_default=False,
            console=console,
        )
        try:
            return parse_features(answer)
        except ValueError as exc:
            print_error(str(exc))


def _value_of(value: Any) -> Any:
    """Return the ``.value`` of an enum member, or *value* itself."""
    return getattr(value, "value", value)
