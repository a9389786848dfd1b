"""Post-generation steps: dependency installation, git init, next steps.

Everything here runs inside the generated project via ``cwd=`` rather than
changing the process working directory.
"""

from __future__ import annotations

from pathlib import Path

from extgen.config import Settings
from extgen.errors import InstallError
from extgen.models import ExtensionType, GenerationConfig
from extgen.utils import console, print_success, print_warning, run_command


class Installer:
    """Finishes a generated extension according to its ``GenerationConfig``."""

    def __init__(self, config: GenerationConfig, settings: Settings | None = None) -> None:
        self.config = config
        self.settings = settings or Settings()

    async def run(self, project_root: str | Path, skip_install: bool = False) -> bool:
        """Install dependencies, initialise git and print the next steps.

        Failures are reported as warnings; the generated files are kept.

        Returns:
            ``True`` if every step that ran succeeded.
        """
        root = Path(project_root)
        ok = True

        if self.config.install_dependencies and not skip_install:
            try:
                await self.install_dependencies(root)
            except InstallError as exc:
                print_warning(str(exc))
                ok = False

        if self.config.git_init:
            try:
                await self.init_git(root)
            except InstallError as exc:
                print_warning(str(exc))
                ok = False

        self.print_next_steps()
        return ok

    async def install_dependencies(self, root: Path) -> None:
        """Run ``npm install`` or ``yarn install`` in *root*.

        Raises:
            InstallError: If the package manager is missing or fails.
        """
        manager = self.config.pkg_manager.value if self.config.pkg_manager else "npm"
        await _run_checked([manager, "install"], root, self.settings.install_timeout)

    async def init_git(self, root: Path) -> None:
        """Run ``git init --quiet`` in *root*.

        Raises:
            InstallError: If git is missing or fails.
        """
        await _run_checked(["git", "init", "--quiet"], root, self.settings.git_timeout)

    def print_next_steps(self) -> None:
        name = self.config.name
        console.print()
        print_success(f"Your extension {name} has been created!")
        console.print()
        console.print("To start editing with Visual Studio Code, use the following commands:")
        console.print()
        console.print(f"     cd {name}")
        console.print("     code .")
        console.print()
        console.print(
            "Open vsc-extension-quickstart.md inside the new extension for further instructions"
        )
        console.print("on how to modify, test and publish your extension.")
        console.print()
        if self.config.type is ExtensionType.EXTENSION_PACK:
            print_warning(
                'Please review the "extensionPack" in the "package.json" '
                "before publishing the extension pack."
            )
            console.print()
        console.print(
            "For more information, also visit http://code.visualstudio.com and follow us @code."
        )


async def _run_checked(cmd: list[str], cwd: Path, timeout: float) -> None:
    returncode, _stdout, stderr = await run_command(cmd, cwd=cwd, timeout=timeout)
    if returncode != 0:
        cmd_str = " ".join(cmd)
        raise InstallError(
            f"Command failed (exit {returncode}): {cmd_str}\n{stderr}",
            command=cmd_str,
            stderr=stderr,
        )
