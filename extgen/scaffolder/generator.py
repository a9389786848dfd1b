"""Extension scaffolding orchestrator.

Takes a completed ``GenerationConfig`` and writes the extension directory:
manifest, readme, changelog, editor settings and, for new extensions, the
starter source and test harness.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from jinja2 import TemplateError

from extgen.errors import GenerationError
from extgen.models import ExtensionType, GenerationConfig

from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Template sets
# ---------------------------------------------------------------------------

# (template path inside the type directory, output path inside the project)
_COMMAND_JS_FILES: list[tuple[str, str]] = [
    ("vscode/launch.json.j2", ".vscode/launch.json"),
    ("vscode/extensions.json.j2", ".vscode/extensions.json"),
    ("vscode/settings.json.j2", ".vscode/settings.json"),
    ("test/runTest.js.j2", "test/runTest.js"),
    ("test/suite/index.js.j2", "test/suite/index.js"),
    ("test/suite/extension.test.js.j2", "test/suite/extension.test.js"),
    ("vscodeignore.j2", ".vscodeignore"),
    ("README.md.j2", "README.md"),
    ("CHANGELOG.md.j2", "CHANGELOG.md"),
    ("vsc-extension-quickstart.md.j2", "vsc-extension-quickstart.md"),
    ("jsconfig.json.j2", "jsconfig.json"),
    ("extension.js.j2", "extension.js"),
    ("package.json.j2", "package.json"),
    ("eslintrc.json.j2", ".eslintrc.json"),
]

_EXTENSION_PACK_FILES: list[tuple[str, str]] = [
    ("vscode/launch.json.j2", ".vscode/launch.json"),
    ("package.json.j2", "package.json"),
    ("vsc-extension-quickstart.md.j2", "vsc-extension-quickstart.md"),
    ("README.md.j2", "README.md"),
    ("CHANGELOG.md.j2", "CHANGELOG.md"),
    ("vscodeignore.j2", ".vscodeignore"),
]

_GIT_FILES: list[tuple[str, str]] = [
    ("gitignore.j2", ".gitignore"),
]


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ExtensionGenerator:
    """Writes the template set selected by ``config.type``.

    The project is created at ``<output_dir>/<config.name>``; every template
    receives ``config.template_context()``.
    """

    def __init__(self, config: GenerationConfig, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    async def generate(self, output_dir: str | Path) -> Path:
        """Generate the extension directory.

        Args:
            output_dir: Parent directory; a folder named after the extension
                identifier is created inside it.

        Returns:
            Path to the generated project root.

        Raises:
            GenerationError: If the target already exists with content, or a
                template cannot be rendered or written.
        """
        project_root = Path(output_dir) / self.config.name
        if await asyncio.to_thread(_has_content, project_root):
            raise GenerationError(f"Target directory is not empty: {project_root}")

        context = self.config.template_context()
        prefix = self.config.type.value
        for template_name, output_name in self.files():
            try:
                await self.renderer.render_to_file(
                    f"{prefix}/{template_name}", project_root / output_name, context
                )
            except (TemplateError, OSError) as exc:
                raise GenerationError(f"Cannot write {output_name}: {exc}") from exc

        return project_root

    def files(self) -> list[tuple[str, str]]:
        """Return the ``(template, output)`` pairs for the configured type."""
        if self.config.type is ExtensionType.EXTENSION_PACK:
            return list(_EXTENSION_PACK_FILES)

        files = list(_COMMAND_JS_FILES)
        if self.config.git_init:
            files.extend(_GIT_FILES)
        return files


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _has_content(path: Path) -> bool:
    if path.is_file():
        return True
    return path.is_dir() and any(path.iterdir())
