"""Integration tests for the status and token commands."""

from __future__ import annotations

import re

import httpx
import respx
from typer.testing import CliRunner

from openclaw_installer import __version__
from openclaw_installer.app import app

runner = CliRunner()

URL = "https://api.targon.com/v1/deployments"


class TestStatusCommand:
    @respx.mock
    def test_status_table(self):
        respx.get(f"{URL}/abc123").mock(
            return_value=httpx.Response(200, json={
                "Name": "my-bot",
                "PortToDNSMapping": {"18789": "foo.example.com"},
            })
        )
        result = runner.invoke(app, ["status", "abc123", "--api-key", "k"])
        assert result.exit_code == 0, result.output
        assert "my-bot" in result.output
        assert "https://foo.example.com" in result.output
        assert "https://targon.com/rentals/abc123" in result.output

    @respx.mock
    def test_status_bracketed_name_shown_verbatim(self):
        respx.get(f"{URL}/abc123").mock(
            return_value=httpx.Response(200, json={"Name": "bot[/v1]"})
        )
        result = runner.invoke(app, ["status", "abc123", "--api-key", "k"])
        assert result.exit_code == 0, result.output
        assert "bot[/v1]" in result.output

    @respx.mock
    def test_status_yaml(self):
        respx.get(f"{URL}/abc123").mock(
            return_value=httpx.Response(200, json={"PortToDNSMapping": {"1": "a.example.com"}})
        )
        result = runner.invoke(app, ["status", "abc123", "--api-key", "k", "-f", "yaml"])
        assert result.exit_code == 0
        assert "deployment_uid: abc123" in result.output
        assert "https://a.example.com" in result.output

    @respx.mock
    def test_status_api_key_from_env(self, monkeypatch):
        monkeypatch.setenv("TARGON_API_KEY", "env-key")
        route = respx.get(f"{URL}/abc").mock(return_value=httpx.Response(200, json={}))
        result = runner.invoke(app, ["status", "abc"])
        assert result.exit_code == 0
        assert route.calls.last.request.headers["Authorization"] == "Bearer env-key"

    @respx.mock
    def test_status_not_found(self):
        respx.get(f"{URL}/nope").mock(return_value=httpx.Response(404, json={"error": "not found"}))
        result = runner.invoke(app, ["status", "nope", "--api-key", "k"])
        assert result.exit_code == 1
        assert "HTTP 404" in result.output


class TestTokenCommand:
    def test_token(self):
        result = runner.invoke(app, ["token"])
        assert result.exit_code == 0
        assert re.fullmatch(r"[0-9a-f]{64}", result.output.strip())


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"openclaw-targon {__version__}" in result.output
