"""Shared utility functions for rest-generate.

Provides project-name validation, file-system helpers, and Rich-based console
reporting.  Nothing in the scaffolder core prints; only the CLI and the
prompts use the console helpers below.
"""

from __future__ import annotations

import re
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()
error_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Project-name helpers
# ---------------------------------------------------------------------------

# URL-safe npm name characters; scoped names ("@scope/pkg") are rejected since
# the name is also the target directory.
_PROJECT_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._~-]*$")
_MAX_PROJECT_NAME_LENGTH = 214


class InvalidProjectNameError(ValueError):
    """Raised when a project name cannot be used as a directory and package name."""


def validate_project_name(name: str) -> str:
    """Return *name* stripped of surrounding whitespace, or raise.

    The name must be usable both as a directory name and as an npm package
    name: non-empty, no path separators, not ``.`` or ``..``, and made of
    URL-safe characters.

    Examples::

        validate_project_name("demo-api")  -> "demo-api"
        validate_project_name("a/b")       -> InvalidProjectNameError
    """
    cleaned = name.strip()
    if not cleaned:
        raise InvalidProjectNameError("Project name must not be empty")
    if "/" in cleaned or "\\" in cleaned:
        raise InvalidProjectNameError(
            f"Project name must not contain path separators: {cleaned!r}"
        )
    if cleaned in (".", ".."):
        raise InvalidProjectNameError(f"Project name is not a valid directory name: {cleaned!r}")
    if len(cleaned) > _MAX_PROJECT_NAME_LENGTH:
        raise InvalidProjectNameError(
            f"Project name is longer than {_MAX_PROJECT_NAME_LENGTH} characters"
        )
    if not _PROJECT_NAME_RE.match(cleaned):
        raise InvalidProjectNameError(
            f"Project name may only contain letters, digits, '.', '_', '~' and '-' "
            f"and must start with a letter or digit: {cleaned!r}"
        )
    return cleaned


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Args:
        path: Directory path.

    Returns:
        The ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def write_file(path: Path, content: str) -> None:
    """Write *content* to *path*, replacing any existing file.

    Parent directories are created if missing.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(rows: dict[str, str], title: str = "Project") -> None:
    """Print the chosen options of a generated project, one row per option."""
    table = Table(title=title, title_justify="left", header_style="bold cyan")
    table.add_column("Option", style="dim", no_wrap=True)
    table.add_column("Choice", style="green")
    for option, choice in rows.items():
        table.add_row(option, escape(choice))
    console.print(table)


def print_info(message: str) -> None:
    """Print a blue informational message."""
    console.print(f"[blue]{escape(message)}[/blue]")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message to stderr."""
    error_console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
