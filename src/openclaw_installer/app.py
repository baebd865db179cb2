"""Root Typer app — global options and command registration."""

from __future__ import annotations

from typing import Optional

import typer

from openclaw_installer import __version__
from openclaw_installer.commands import deploy, status, token

app = typer.Typer(
    name="openclaw-targon",
    help="Deploy OpenClaw agents to Targon.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    if value:
        print(f"openclaw-targon {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """OpenClaw installer for Targon: configure and deploy a gateway."""


# Register commands
app.command("deploy")(deploy.deploy)
app.command("status")(status.status)
app.command("token")(token.token)


def main() -> None:
    app()
