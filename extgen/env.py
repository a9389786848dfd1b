"""Access to the developer's VS Code environment.

Two collaborators live here: the latest-release lookup that fills
``engines.vscode`` in the generated manifest, and the query for extensions
that are already installed locally (used to seed an extension pack).

Typical usage::

    environment = VSCodeEnvironment(Settings())
    engine = await environment.latest_engine()          # "^1.95.0"
    installed = await environment.installed_extensions()
"""

from __future__ import annotations

from typing import Any

import httpx

from extgen.config import Settings
from extgen.errors import EnvironmentQueryError, VersionLookupError
from extgen.utils import print_warning, run_command


class VSCodeEnvironment:
    """Queries the release feed over HTTP and the local ``code`` CLI."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self._engine: str | None = None

    # ------------------------------------------------------------------
    # Version lookup
    # ------------------------------------------------------------------

    async def latest_engine(self) -> str:
        """Return the ``engines.vscode`` range for the latest stable release.

        The lookup happens once per instance.  Any failure is reported and the
        configured fallback range is returned instead.
        """
        if self._engine is None:
            try:
                self._engine = await self.fetch_latest_engine()
            except VersionLookupError as exc:
                print_warning(f"Unable to evaluate the latest vscode version: {exc}")
                print_warning(f"Using fallback version {self.settings.fallback_engine}")
                self._engine = self.settings.fallback_engine
        return self._engine

    async def fetch_latest_engine(self) -> str:
        """Fetch the release feed and turn the newest ``X.Y.Z`` into ``^X.Y.0``.

        Raises:
            VersionLookupError: On connection problems, non-200 responses or
                an unexpected payload.
        """
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.http_timeout, connect=5.0)
            ) as client:
                response = await client.get(
                    self.settings.releases_url, headers={"X-API-Version": "2"}
                )
        except httpx.ConnectError as exc:
            raise VersionLookupError(f"Cannot connect to {self.settings.releases_url}") from exc
        except httpx.TimeoutException as exc:
            raise VersionLookupError(
                f"Request timed out after {self.settings.http_timeout}s"
            ) from exc
        except httpx.HTTPError as exc:
            raise VersionLookupError(str(exc)) from exc

        if response.status_code != 200:
            raise VersionLookupError(f"Status code: {response.status_code}, {response.text}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise VersionLookupError(f"Problem parsing version: {response.text}") from exc
        return engine_from_releases(payload)

    # ------------------------------------------------------------------
    # Installed extensions
    # ------------------------------------------------------------------

    async def installed_extensions(self) -> list[str]:
        """Return the identifiers printed by ``code --list-extensions``.

        Raises:
            EnvironmentQueryError: If the CLI is missing, times out or exits
                with a non-zero status.
        """
        cmd = [self.settings.code_command, "--list-extensions"]
        returncode, stdout, stderr = await run_command(cmd, timeout=self.settings.query_timeout)
        if returncode != 0:
            raise EnvironmentQueryError(
                f"Listing installed extensions failed (exit {returncode}): {stderr}",
                command=" ".join(cmd),
                stderr=stderr,
            )
        return stdout.split()


def engine_from_releases(payload: Any) -> str:
    """Derive the engine range from a release feed payload.

    Accepts both feed shapes: a list of objects with a ``version`` key
    (``X-API-Version: 2``) and a plain list of version strings.
    """
    if not isinstance(payload, list) or not payload:
        raise VersionLookupError(f"Problem parsing version: {payload!r}")

    latest = payload[0]
    version = latest.get("version") if isinstance(latest, dict) else latest
    if not isinstance(version, str):
        raise VersionLookupError(f"Problem parsing version: {latest!r}")

    segments = version.split(".")
    if len(segments) != 3:
        raise VersionLookupError(f"Unexpected version format: {version}")
    return f"^{segments[0]}.{segments[1]}.0"
