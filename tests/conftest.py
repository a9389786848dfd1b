"""Shared pytest fixtures for the extgen test suite.

Provides reusable fixtures for:
- A scripted answer source that records every question asked
- A fake VS Code environment (engine version + installed extensions)
- Ready-made GenerationConfig instances for both extension types
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from extgen.config import Settings
from extgen.models import ExtensionType, GenerationConfig, PackageManager
from extgen.prompts import Question


# ---------------------------------------------------------------------------
# Answer source double
# ---------------------------------------------------------------------------

class ScriptedAnswerSource:
    """Replays answers keyed by question name and records what was asked.

    Each entry in *answers* is either a single value or a list of values
    consumed in order (for questions that get asked more than once).
    A question without a scripted answer receives its default.
    """

    def __init__(self, answers: dict[str, Any] | None = None) -> None:
        self._answers = {
            key: list(value) if isinstance(value, list) else [value]
            for key, value in (answers or {}).items()
        }
        self.asked: list[Question] = []

    @property
    def asked_names(self) -> list[str]:
        return [q.name for q in self.asked]

    def question(self, name: str) -> Question:
        return next(q for q in self.asked if q.name == name)

    async def ask(self, question: Question) -> Any:
        self.asked.append(question)
        queue = self._answers.get(question.name)
        if queue:
            return queue.pop(0) if len(queue) > 1 else queue[0]
        return question.default


@pytest.fixture
def scripted_answers():
    """Factory fixture: ``scripted_answers({"name": "my-ext"})``."""
    return ScriptedAnswerSource


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_environment() -> MagicMock:
    """A VSCodeEnvironment stand-in with a fixed engine and two extensions."""
    env = MagicMock()
    env.latest_engine = AsyncMock(return_value="^1.95.0")
    env.installed_extensions = AsyncMock(return_value=["a.ext", "b.ext"])
    return env


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(output_dir=tmp_path)


# ---------------------------------------------------------------------------
# Generation configs
# ---------------------------------------------------------------------------

@pytest.fixture
def command_js_config() -> GenerationConfig:
    return GenerationConfig(
        type=ExtensionType.COMMAND_JS,
        display_name="Hello World",
        name="hello-world",
        description="Says hello.",
        vscode_engine="^1.95.0",
        check_javascript=True,
        git_init=True,
        pkg_manager=PackageManager.NPM,
    )


@pytest.fixture
def extension_pack_config() -> GenerationConfig:
    return GenerationConfig(
        type=ExtensionType.EXTENSION_PACK,
        display_name="My Pack",
        name="my-pack",
        description="Favourite extensions.",
        vscode_engine="^1.95.0",
        extension_list=["a.ext", "b.ext"],
    )
