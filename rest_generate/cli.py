"""Command line entry point for rest-generate.

Usage::

    rest-generate create my-api
    rest-generate create my-api --language typescript --database mongodb \\
        --features auth,tests --auth jwt --yes
    python -m rest_generate create my-api

This module is the only place that turns errors into messages and exit
statuses; the scaffolder core raises and never exits.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Any, NoReturn, Optional, Sequence

from pydantic import ValidationError

from rest_generate import __version__
from rest_generate.config import Config
from rest_generate.prompts import collect_options, confirm_overwrite, parse_features
from rest_generate.scaffolder.generator import ProjectGenerator
from rest_generate.scaffolder.options import (
    AuthStrategy,
    Feature,
    InvalidConfigurationError,
    Language,
    ProjectOptions,
    ValidationLibrary,
    available_databases,
    available_frameworks,
    available_orms,
)
from rest_generate.utils import (
    console,
    error_console,
    print_error,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
    validate_project_name,
)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def _features_arg(value: str) -> list[Feature]:
    try:
        return parse_features(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _implemented_orms() -> list[str]:
    values: list[str] = []
    for database in available_databases():
        for orm in available_orms(database):
            if orm.value not in values:
                values.append(orm.value)
    return values


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser whose usage errors exit with ``EXIT_ERROR``."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_ERROR, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    """Build the ``rest-generate`` argument parser."""
    parser = _ArgumentParser(
        prog="rest-generate",
        description="Generate Node.js REST API projects with customizable options",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  rest-generate create my-api\n"
            "  rest-generate create my-api --language javascript --database none\n"
            "  rest-generate create my-api --features auth,validation --auth jwt "
            "--validation zod -y\n"
        ),
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        default=None,
        help="Disable colored output (also honours NO_COLOR)",
    )

    subparsers = parser.add_subparsers(dest="command")

    create = subparsers.add_parser(
        "create",
        help="Create a new REST API project",
        description="Create a new REST API project",
    )
    create.add_argument("project_name", metavar="project-name", help="Name of the project")
    create.add_argument(
        "--output", "-o",
        default=None,
        help="Parent directory for the project (default: current directory)",
    )
    create.add_argument(
        "--yes", "-y",
        action="store_true",
        default=None,
        help="Do not ask before writing into an existing directory",
    )
    # SUPPRESS keeps a top-level --no-color from being reset by the subcommand.
    create.add_argument(
        "--no-color",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Disable colored output (also honours NO_COLOR)",
    )
    create.add_argument("--language", choices=[lang.value for lang in Language])
    create.add_argument("--framework", choices=[f.value for f in available_frameworks()])
    create.add_argument("--database", choices=[d.value for d in available_databases()])
    create.add_argument("--orm", choices=_implemented_orms())
    create.add_argument(
        "--features",
        type=_features_arg,
        default=None,
        help=f"Comma-separated features ({', '.join(f.value for f in Feature)}); "
        "pass an empty string for none",
    )
    create.add_argument(
        "--validation",
        dest="validation_library",
        choices=[v.value for v in ValidationLibrary],
        help="Validation library (used when the validation feature is selected)",
    )
    create.add_argument(
        "--auth",
        dest="auth_strategy",
        choices=[s.value for s in AuthStrategy],
        help="Authentication strategy (used when the auth feature is selected)",
    )
    return parser


def _config_from_args(args: argparse.Namespace) -> Config:
    """Environment configuration overridden by command-line flags."""
    config = Config.from_env()
    updates: dict[str, Any] = {}
    if getattr(args, "output", None):
        updates["output_dir"] = args.output
    if getattr(args, "yes", None):
        updates["assume_yes"] = True
    if args.no_color:
        updates["no_color"] = True
    if updates:
        config = Config(**{**config.model_dump(), **updates})
    return config


def _preset_from_args(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "language": args.language,
        "framework": args.framework,
        "database": args.database,
        "orm": args.orm,
        "features": args.features,
        "validation_library": args.validation_library,
        "auth_strategy": args.auth_strategy,
    }


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def create_project(args: argparse.Namespace, config: Config) -> int:
    """Run ``create``: collect options, confirm, and generate."""
    name = validate_project_name(args.project_name)
    project_dir = config.project_dir(name)

    print_info(f"Creating a new REST API project: {name}")

    if project_dir.exists() and not config.assume_yes:
        if not confirm_overwrite(project_dir):
            print_warning("Project creation cancelled.")
            return EXIT_OK

    try:
        options = collect_options(name, _preset_from_args(args))
    except ValidationError as exc:
        raise InvalidConfigurationError(_validation_problems(exc)) from None

    print_info("Generating project...")
    written = asyncio.run(ProjectGenerator(options).generate(project_dir))

    print_summary_table(_summary(options, len(written)), title=f"Project {name}")
    print_success(f"Project {name} successfully created!")
    console.print(
        "\nNext steps:\n"
        f"  cd {name}\n"
        "  npm install\n"
        "  npm run dev\n"
    )
    return EXIT_OK


def _validation_problems(exc: ValidationError) -> list[str]:
    """One message per failed check, without pydantic's location/URL dump."""
    problems: list[str] = []
    for error in exc.errors():
        original = error.get("ctx", {}).get("error")
        problems.append(str(original) if original is not None else error["msg"])
    return problems


def _summary(options: ProjectOptions, file_count: int) -> dict[str, str]:
    features = ", ".join(f.value for f in options.sorted_features()) or "none"
    summary = {
        "Language": options.language.value,
        "Framework": options.framework.value,
        "Database": options.database.value,
        "ORM/ODM": options.orm.value,
        "Features": features,
    }
    if options.validation_library is not None:
        summary["Validation"] = options.validation_library.value
    if options.auth_strategy is not None:
        summary["Auth strategy"] = options.auth_strategy.value
    summary["Files written"] = str(file_count)
    return summary


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def run(argv: Optional[Sequence[str]] = None) -> int:
    """Parse *argv*, dispatch, and return the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    try:
        config = _config_from_args(args)
        if config.no_color:
            console.no_color = True
            error_console.no_color = True
        return create_project(args, config)
    except KeyboardInterrupt:
        print_error("Aborted.")
        return EXIT_INTERRUPTED
    except Exception as exc:
        print_error(f"Error creating project: {exc}")
        return EXIT_ERROR


def main() -> None:
    """CLI entry point for ``rest-generate`` and ``python -m rest_generate``."""
    sys.exit(run())


if __name__ == "__main__":
    main()
