"""Unit tests for the VS Code environment collaborators (extgen.env).

Tests cover:
- engine_from_releases for both feed shapes and malformed payloads
- VSCodeEnvironment.fetch_latest_engine (success, HTTP status, connect error, timeout)
- VSCodeEnvironment.latest_engine fallback and caching
- VSCodeEnvironment.installed_extensions (success, failure)
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from extgen.config import Settings
from extgen.env import VSCodeEnvironment, engine_from_releases
from extgen.errors import EnvironmentQueryError, VersionLookupError


def _mock_http_client(response=None, side_effect=None) -> AsyncMock:
    mock_client = AsyncMock()
    mock_client.get = AsyncMock(return_value=response, side_effect=side_effect)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


def _response(status: int = 200, payload=None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.text = text
    response.json.return_value = payload
    return response


# ---------------------------------------------------------------------------
# engine_from_releases
# ---------------------------------------------------------------------------


class TestEngineFromReleases:
    @pytest.mark.unit
    def test_object_feed(self):
        payload = [{"version": "1.95.3", "url": "..."}, {"version": "1.94.2"}]
        assert engine_from_releases(payload) == "^1.95.0"

    @pytest.mark.unit
    def test_string_feed(self):
        assert engine_from_releases(["1.90.1", "1.89.0"]) == "^1.90.0"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "payload",
        [[], {}, None, [{"name": "x"}], ["1.95"], [42]],
    )
    def test_malformed(self, payload):
        with pytest.raises(VersionLookupError):
            engine_from_releases(payload)


# ---------------------------------------------------------------------------
# Version lookup
# ---------------------------------------------------------------------------


class TestFetchLatestEngine:
    @pytest.mark.unit
    async def test_success_sends_api_version_header(self):
        mock_client = _mock_http_client(_response(payload=[{"version": "1.96.0"}]))

        with patch("httpx.AsyncClient", return_value=mock_client):
            engine = await VSCodeEnvironment().fetch_latest_engine()

        assert engine == "^1.96.0"
        args, kwargs = mock_client.get.call_args
        assert args[0] == Settings().releases_url
        assert kwargs["headers"] == {"X-API-Version": "2"}

    @pytest.mark.unit
    async def test_non_200_status(self):
        mock_client = _mock_http_client(_response(status=503, text="unavailable"))

        with patch("httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(VersionLookupError, match="503"):
                await VSCodeEnvironment().fetch_latest_engine()

    @pytest.mark.unit
    async def test_connect_error(self):
        mock_client = _mock_http_client(side_effect=httpx.ConnectError("refused"))

        with patch("httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(VersionLookupError, match="Cannot connect"):
                await VSCodeEnvironment().fetch_latest_engine()

    @pytest.mark.unit
    async def test_timeout(self):
        mock_client = _mock_http_client(side_effect=httpx.TimeoutException("slow"))

        with patch("httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(VersionLookupError, match="timed out"):
                await VSCodeEnvironment().fetch_latest_engine()

    @pytest.mark.unit
    async def test_invalid_json(self):
        response = _response(text="<html>")
        response.json.side_effect = ValueError("not json")
        mock_client = _mock_http_client(response)

        with patch("httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(VersionLookupError, match="Problem parsing"):
                await VSCodeEnvironment().fetch_latest_engine()


class TestLatestEngine:
    @pytest.mark.unit
    async def test_fallback_on_failure(self):
        env = VSCodeEnvironment(Settings(fallback_engine="^1.80.0"))
        with patch.object(
            env, "fetch_latest_engine", AsyncMock(side_effect=VersionLookupError("offline"))
        ), patch("extgen.env.print_warning") as warn:
            engine = await env.latest_engine()

        assert engine == "^1.80.0"
        assert warn.call_count == 2

    @pytest.mark.unit
    async def test_looked_up_once(self):
        env = VSCodeEnvironment()
        fetch = AsyncMock(return_value="^1.95.0")
        with patch.object(env, "fetch_latest_engine", fetch):
            assert await env.latest_engine() == "^1.95.0"
            assert await env.latest_engine() == "^1.95.0"

        fetch.assert_awaited_once()


# ---------------------------------------------------------------------------
# Installed extensions
# ---------------------------------------------------------------------------


class TestInstalledExtensions:
    @pytest.mark.unit
    async def test_splits_on_whitespace(self):
        run = AsyncMock(return_value=(0, "a.ext b.ext", ""))
        with patch("extgen.env.run_command", run):
            result = await VSCodeEnvironment().installed_extensions()

        assert result == ["a.ext", "b.ext"]
        assert run.call_args[0][0] == ["code", "--list-extensions"]

    @pytest.mark.unit
    async def test_newline_separated(self):
        run = AsyncMock(return_value=(0, "ms-python.python\nesbenp.prettier-vscode", ""))
        with patch("extgen.env.run_command", run):
            result = await VSCodeEnvironment().installed_extensions()

        assert result == ["ms-python.python", "esbenp.prettier-vscode"]

    @pytest.mark.unit
    async def test_custom_command(self):
        run = AsyncMock(return_value=(0, "", ""))
        with patch("extgen.env.run_command", run):
            result = await VSCodeEnvironment(Settings(code_command="code-insiders")).installed_extensions()

        assert result == []
        assert run.call_args[0][0][0] == "code-insiders"

    @pytest.mark.unit
    async def test_failure_raises(self):
        run = AsyncMock(return_value=(-1, "", "Cannot run code: not found"))
        with patch("extgen.env.run_command", run):
            with pytest.raises(EnvironmentQueryError) as exc_info:
                await VSCodeEnvironment().installed_extensions()

        assert exc_info.value.command == "code --list-extensions"
        assert "not found" in exc_info.value.stderr
