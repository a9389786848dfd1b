"""Runtime settings for the extension generator.

Typed settings for the collaborators around the configuration builder: where
to write, how to look up the latest VS Code release, and how to talk to the
local ``code`` CLI and package managers.  Built once by the CLI and passed
down explicitly.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

RELEASES_URL = "https://update.code.visualstudio.com/api/releases/stable"
FALLBACK_ENGINE = "^1.54.0"


class Settings(BaseModel):
    """Global generator settings."""

    output_dir: Path = Field(default=Path("."), description="Parent directory of the new extension")
    releases_url: str = Field(default=RELEASES_URL)
    fallback_engine: str = Field(
        default=FALLBACK_ENGINE,
        description="Engine range used when the latest release cannot be determined",
    )
    http_timeout: float = Field(default=10.0, gt=0, description="Version lookup timeout in seconds")
    code_command: str = Field(default="code", description="VS Code CLI executable")
    query_timeout: int = Field(default=30, ge=1, description="Extension query timeout in seconds")
    install_timeout: int = Field(
        default=600, ge=1, description="Package manager install timeout in seconds"
    )
    git_timeout: int = Field(default=60, ge=1, description="git init timeout in seconds")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            EXTGEN_OUTPUT_DIR, EXTGEN_RELEASES_URL, EXTGEN_HTTP_TIMEOUT,
            EXTGEN_CODE_COMMAND, EXTGEN_INSTALL_TIMEOUT, EXTGEN_GIT_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("EXTGEN_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["EXTGEN_OUTPUT_DIR"])
        if os.environ.get("EXTGEN_RELEASES_URL"):
            kwargs["releases_url"] = os.environ["EXTGEN_RELEASES_URL"]
        if os.environ.get("EXTGEN_HTTP_TIMEOUT"):
            kwargs["http_timeout"] = float(os.environ["EXTGEN_HTTP_TIMEOUT"])
        if os.environ.get("EXTGEN_CODE_COMMAND"):
            kwargs["code_command"] = os.environ["EXTGEN_CODE_COMMAND"]
        if os.environ.get("EXTGEN_INSTALL_TIMEOUT"):
            kwargs["install_timeout"] = int(os.environ["EXTGEN_INSTALL_TIMEOUT"])
        if os.environ.get("EXTGEN_GIT_TIMEOUT"):
            kwargs["git_timeout"] = int(os.environ["EXTGEN_GIT_TIMEOUT"])
        return cls(**kwargs)
