"""Deploy command — run the wizard, submit the deployment, print the URLs."""

from __future__ import annotations

import time
from typing import Annotated, Optional

import typer
from rich.markup import escape

from openclaw_installer.client.errors import (
    DeploymentCancelled,
    DeploymentFailedError,
    error_handler,
)
from openclaw_installer.client.targon import TargonClient
from openclaw_installer.commands._common import (
    ApiKeyOpt,
    DeployUrlOpt,
    FormatOpt,
    check_format,
)
from openclaw_installer.config.constants import STATUS_POLL_DELAY
from openclaw_installer.config.models import Channel, Provider, ResourceTier
from openclaw_installer.config.settings import InstallerSettings, resolve_settings
from openclaw_installer.deploy.payload import build_request, masked_payload
from openclaw_installer.output import messages, presenter
from openclaw_installer.output.formatter import output, output_json
from openclaw_installer.utils.tokens import token_sources
from openclaw_installer.wizard.collector import Presets, Wizard, review


def preflight(deploy_url: str | None) -> InstallerSettings:
    """Check the environment before any prompt is shown."""
    messages.section("Checking environment")
    settings = resolve_settings(url=deploy_url)
    messages.success(f"Deploy endpoint: {escape(settings.deploy_url)}")
    sources = token_sources()
    if sources["secrets"]:
        messages.success("Secure random source found (used for token generation)")
    elif sources["urandom"]:
        messages.warn("secrets unavailable, will fall back to /dev/urandom for token generation")
    else:
        messages.warn("No secure random source found; generated tokens will be weak")
    return settings


@error_handler
def deploy(
    api_key: ApiKeyOpt = None,
    name: Annotated[Optional[str], typer.Option("--name", "-n", help="Deployment name")] = None,
    resource: Annotated[Optional[ResourceTier], typer.Option(
        "--resource", "-r", help="Resource size",
    )] = None,
    provider: Annotated[Optional[Provider], typer.Option(
        "--provider", "-p", help="Model provider ('none' to skip)",
    )] = None,
    provider_key: Annotated[Optional[str], typer.Option(
        "--provider-key", help="Provider API key",
    )] = None,
    model: Annotated[Optional[str], typer.Option("--model", "-m", help="Default model name")] = None,
    base_url: Annotated[Optional[str], typer.Option(
        "--base-url", help="Provider API base URL (sybill only)",
    )] = None,
    channel: Annotated[Optional[Channel], typer.Option(
        "--channel", "-c", help="Messaging channel ('none' to skip)",
    )] = None,
    channel_token: Annotated[Optional[str], typer.Option(
        "--channel-token", help="Channel bot token",
    )] = None,
    allow_from: Annotated[Optional[str], typer.Option(
        "--allow-from", help="Comma-separated channel allow-list",
    )] = None,
    port: Annotated[Optional[str], typer.Option("--port", help="Gateway port")] = None,
    gateway_token: Annotated[Optional[str], typer.Option(
        "--gateway-token", help="Gateway token (generated when omitted)",
    )] = None,
    disable_device_auth: Annotated[Optional[bool], typer.Option(
        "--disable-device-auth/--enable-device-auth",
        help="Skip device pairing approval",
        show_default=False,
    )] = None,
    yes: Annotated[bool, typer.Option(
        "--yes", "-y", help="Accept defaults for optional prompts and skip confirmation",
    )] = False,
    dry_run: Annotated[bool, typer.Option(
        "--dry-run", help="Print the request (secrets masked) without deploying",
    )] = False,
    deploy_url: DeployUrlOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Deploy OpenClaw to Targon."""
    check_format(fmt)
    presets = Presets(
        api_key=api_key,
        name=name,
        resource=resource,
        provider=provider,
        provider_api_key=provider_key,
        model=model,
        base_url=base_url,
        channel=channel,
        channel_token=channel_token,
        allow_from=allow_from,
        port=port,
        gateway_token=gateway_token,
        disable_device_auth=disable_device_auth,
    )
    # json/yaml keep stdout for the record alone.
    with messages.chatter_to_stderr(fmt != "table"):
        run_deploy(
            presets, assume_yes=yes, dry_run=dry_run, deploy_url=deploy_url, fmt=fmt,
        )


def run_deploy(
    presets: Presets,
    *,
    assume_yes: bool,
    dry_run: bool,
    deploy_url: str | None,
    fmt: str,
) -> None:
    """Preflight, wizard, review, then submit and report."""
    messages.console.print("[bold]Welcome to the OpenClaw installer for Targon.[/]")
    messages.muted(
        "This will deploy OpenClaw to Targon's cloud and return your dashboard URL."
    )
    settings = preflight(deploy_url)

    answers = Wizard(presets=presets, assume_yes=assume_yes).run()
    config = answers.config

    if not review(config, assume_yes=assume_yes):
        raise DeploymentCancelled()

    request = build_request(config)
    if dry_run:
        messages.section("Dry run")
        output_json(masked_payload(request))
        return

    messages.section("Deploying")
    settings = settings.model_copy(update={"api_key": answers.api_key})
    with TargonClient(settings) as client:
        messages.info("Sending deploy request to Targon...")
        response = client.submit(request)
        result = presenter.parse_deploy_result(response.body)
        if result.error:
            raise DeploymentFailedError(result.error)

        presenter.render_summary(result)
        if result.deployment_uid:
            time.sleep(STATUS_POLL_DELAY)
            status = client.fetch_status(result.deployment_uid)
            if status is not None:
                result = presenter.apply_status(result, status)
                presenter.render_urls(result)

    presenter.render_footer(result, config.gateway_token)
    if fmt != "table":
        output(presenter.result_record(result), fmt)
