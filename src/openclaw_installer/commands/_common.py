"""Shared helpers for CLI commands — option types and client factory."""

from __future__ import annotations

from typing import Annotated

import typer

from openclaw_installer.client.targon import TargonClient
from openclaw_installer.config.constants import ENV_API_KEY, ENV_DEPLOY_URL
from openclaw_installer.config.settings import resolve_settings
from openclaw_installer.output import messages
from openclaw_installer.output.formatter import FORMATS

# Shared Typer option type aliases
DeployUrlOpt = Annotated[
    str | None,
    typer.Option("--deploy-url", help=f"Deploy endpoint override (default: ${ENV_DEPLOY_URL})"),
]
ApiKeyOpt = Annotated[
    str | None,
    typer.Option("--api-key", envvar=ENV_API_KEY, help="Targon API key", show_default=False),
]
FormatOpt = Annotated[
    str,
    typer.Option("--format", "-f", help="Result output format: table, json, or yaml"),
]


def check_format(fmt: str) -> None:
    if fmt not in FORMATS:
        messages.error(f"Unknown format '{fmt}'. Use one of: {', '.join(FORMATS)}.")
        raise typer.Exit(1)


def make_client(deploy_url: str | None, api_key: str | None) -> TargonClient:
    """Create a TargonClient from CLI options, env vars, or defaults."""
    settings = resolve_settings(url=deploy_url, api_key=api_key)
    return TargonClient(settings)
