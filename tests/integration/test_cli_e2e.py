"""Integration tests for the full generator run (extgen.cli.run).

The configuration builder, template rendering and file writing are real.
The VS Code environment and the installer are mocked, so no network access
or external tools are required.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from extgen.cli import run
from extgen.models import BuilderOptions


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _environment() -> MagicMock:
    env = MagicMock()
    env.latest_engine = AsyncMock(return_value="^1.95.0")
    env.installed_extensions = AsyncMock(return_value=["a.ext", "b.ext"])
    return env


@pytest.mark.integration
class TestRun:
    async def test_new_extension(self, settings, scripted_answers, tmp_path):
        answers = scripted_answers({"displayName": "Hello World", "gitInit": True})
        installer_run = AsyncMock(return_value=True)

        with patch("extgen.cli.VSCodeEnvironment", return_value=_environment()), patch(
            "extgen.cli.Installer.run", installer_run
        ):
            root = await run(
                BuilderOptions(extension_type="command-js"),
                settings,
                answers=answers,
                skip_install=True,
                banner=False,
            )

        assert root == tmp_path / "hello-world"
        manifest = json.loads((root / "package.json").read_text(encoding="utf-8"))
        assert manifest["engines"]["vscode"] == "^1.95.0"
        assert (root / ".gitignore").is_file()
        assert installer_run.call_args.kwargs == {"skip_install": True}

    async def test_extension_pack(self, settings, scripted_answers, tmp_path):
        answers = scripted_answers({"name": "my-pack"})

        with patch("extgen.cli.VSCodeEnvironment", return_value=_environment()), patch(
            "extgen.cli.Installer.run", AsyncMock(return_value=True)
        ):
            root = await run(
                BuilderOptions(extension_type="extensionpack", extension_param="y"),
                settings,
                answers=answers,
                banner=False,
            )

        manifest = json.loads((root / "package.json").read_text(encoding="utf-8"))
        assert manifest["extensionPack"] == ["a.ext", "b.ext"]
        assert answers.asked_names == ["displayName", "name", "description"]
