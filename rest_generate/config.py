"""rest-generate configuration.

Process-level settings for the command line tool.  These never influence the
content of a generated project, only where it is written and how the CLI
behaves.  Settings use a Pydantic v2 model so they are validated at
construction time.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

_TRUTHY = {"1", "true", "yes", "on"}


class Config(BaseModel):
    """Global rest-generate configuration.

    Instances are created once by the CLI entry point, from environment
    variables overridden by command-line flags.
    """

    output_dir: Path = Field(
        default_factory=Path.cwd,
        description="Parent directory in which the project directory is created",
    )
    assume_yes: bool = Field(
        default=False,
        description="Skip the confirmation when the project directory already exists",
    )
    no_color: bool = Field(default=False, description="Disable colored console output")

    def project_dir(self, project_name: str) -> Path:
        """Absolute path of the directory for *project_name*."""
        return (self.output_dir / project_name).resolve()

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            REST_GENERATE_OUTPUT_DIR, REST_GENERATE_ASSUME_YES, NO_COLOR.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("REST_GENERATE_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["REST_GENERATE_OUTPUT_DIR"])
        if os.environ.get("REST_GENERATE_ASSUME_YES"):
            kwargs["assume_yes"] = (
                os.environ["REST_GENERATE_ASSUME_YES"].strip().lower() in _TRUTHY
            )
        # https://no-color.org: any non-empty value disables color.
        if os.environ.get("NO_COLOR"):
            kwargs["no_color"] = True
        return cls(**kwargs)
