"""Interactive wizard that collects a DeploymentConfig.

Each step takes its answer from a preset (CLI option) when one was given
and prompts otherwise. Presets are validated like typed answers, except
that an invalid preset is fatal since there is nobody to re-ask.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from rich.markup import escape

from openclaw_installer.client.errors import ValidationError
from openclaw_installer.config.catalog import (
    CHANNEL_MENU,
    CHANNELS,
    PROVIDER_MENU,
    PROVIDERS,
    RESOURCE_MENU,
    channel_display_name,
    provider_display_name,
)
from openclaw_installer.config.constants import DEFAULT_GATEWAY_PORT
from openclaw_installer.config.models import (
    Channel,
    DeploymentConfig,
    Provider,
    ResourceTier,
    is_valid_deploy_name,
)
from openclaw_installer.output import messages
from openclaw_installer.output.tables import kv_table
from openclaw_installer.utils.tokens import generate_token
from openclaw_installer.wizard.prompts import (
    prompt_confirm,
    prompt_menu,
    prompt_optional,
    prompt_required,
    prompt_validated,
    split_allow_list,
)

INVALID_NAME_MESSAGE = (
    "Invalid name. Use lowercase letters, numbers and hyphens"
    " (e.g. my-openclaw). Must start/end with alphanumeric."
)

_PORT_RE = re.compile(r"[0-9]+")


def parse_port(raw: str) -> int:
    """Parse a gateway port, raising ValidationError outside 1-65535."""
    value = raw.strip()
    if not _PORT_RE.fullmatch(value) or not 1 <= int(value) <= 65535:
        raise ValidationError(f"Invalid port number: {raw} (must be 1-65535)")
    return int(value)


@dataclass
class Presets:
    """Answers supplied up front, usually from CLI options."""

    api_key: str | None = None
    name: str | None = None
    resource: ResourceTier | None = None
    provider: Provider | None = None
    provider_api_key: str | None = None
    model: str | None = None
    base_url: str | None = None
    channel: Channel | None = None
    channel_token: str | None = None
    allow_from: str | None = None
    port: str | None = None
    gateway_token: str | None = None
    disable_device_auth: bool | None = None


@dataclass
class WizardResult:
    api_key: str
    config: DeploymentConfig
    token_generated: bool = False


@dataclass
class Wizard:
    """Walks the user through every deployment setting in order."""

    presets: Presets = field(default_factory=Presets)
    assume_yes: bool = False

    def _optional(
        self,
        preset: str | None,
        text: str,
        default: str = "",
        *,
        secret: bool = False,
        blank_hint: str = "leave blank to skip",
    ) -> str:
        if preset is not None:
            return preset.strip() or default
        if self.assume_yes:
            return default
        return prompt_optional(text, default, secret=secret, blank_hint=blank_hint)

    def ask_api_key(self) -> str:
        messages.section("Targon Account")
        if self.presets.api_key:
            messages.info("Using Targon API key from options/environment.")
            return self.presets.api_key
        return prompt_required("Targon API Key", secret=True)

    def ask_name(self) -> str:
        messages.section("Deployment")
        if self.presets.name is not None:
            if not is_valid_deploy_name(self.presets.name):
                raise ValidationError(f"{INVALID_NAME_MESSAGE} Got: {self.presets.name!r}")
            return self.presets.name
        return prompt_validated(
            "Deployment name (lowercase, hyphens allowed)",
            is_valid_deploy_name,
            INVALID_NAME_MESSAGE,
        )

    def ask_resource(self) -> ResourceTier:
        messages.section("Resource Size")
        tier = self.presets.resource
        if tier is None and self.assume_yes:
            tier = RESOURCE_MENU[0]
        if tier is None:
            tier = prompt_menu(
                "Choose resource size",
                RESOURCE_MENU,
                [t.resource_name for t in RESOURCE_MENU],
                default=1,
            )
        messages.info(f"Resource: [bold]{tier.resource_name}[/]")
        return tier

    def ask_provider(self) -> tuple[Provider, str | None, str | None, str | None]:
        """Return (provider, api key, model, base url)."""
        messages.section("Model / Auth Provider")
        provider = self.presets.provider
        if provider is None:
            provider = prompt_menu(
                "Choose provider",
                PROVIDER_MENU,
                [provider_display_name(p) if p is not Provider.NONE else "Skip for now"
                 for p in PROVIDER_MENU],
            )
        info = PROVIDERS.get(provider)
        if info is None:
            messages.warn("Skipping provider setup for now; configure an API provider later.")
            return provider, None, None, None

        messages.info(f"Selected: [bold]{info.display_name}[/]")
        api_key = self.presets.provider_api_key or prompt_required(
            f"Enter {info.display_name} API key", secret=True,
        )
        model = self._optional(self.presets.model, "Default model name", info.default_model)
        messages.info(f"Model: [bold]{escape(model)}[/]")

        base_url = None
        if info.default_base_url:
            base_url = self._optional(
                self.presets.base_url,
                f"{info.display_name} API base URL",
                info.default_base_url,
            )
            messages.info(f"Base URL: [bold]{escape(base_url)}[/]")
        return provider, api_key, model, base_url

    def ask_channel(self) -> tuple[Channel, str | None, list[str]]:
        """Return (channel, token, allow-list)."""
        messages.section("Select Channel (QuickStart)")
        channel = self.presets.channel
        if channel is None:
            channel = prompt_menu(
                "Choose channel",
                CHANNEL_MENU,
                [CHANNELS[c].menu_label if c in CHANNELS else "Skip for now"
                 for c in CHANNEL_MENU],
            )
        info = CHANNELS.get(channel)
        if info is None:
            messages.warn(
                "Skipping channel setup, you can configure channels later via the dashboard."
            )
            return channel, None, []

        messages.info(f"Selected: [bold]{info.display_name}[/]")
        token = None
        if info.needs_token:
            token = self.presets.channel_token or prompt_required(
                f"{info.display_name} Bot Token", secret=True,
            )
        else:
            messages.muted(
                f"{info.display_name} uses QR-based linking. The QR code will"
                " appear in the gateway logs after deploy."
            )
        allow_from = self._optional(
            self.presets.allow_from,
            f"{info.display_name} allowFrom ({info.allow_from_hint})",
        )
        return channel, token, split_allow_list(allow_from)

    def ask_port(self) -> int:
        messages.section("Gateway Port")
        raw = self._optional(self.presets.port, "Gateway port", str(DEFAULT_GATEWAY_PORT))
        port = parse_port(raw)
        messages.info(f"Gateway port: [bold]{port}[/]")
        return port

    def ask_gateway_token(self) -> tuple[str, bool]:
        """Return (token, generated)."""
        messages.section("Gateway Token")
        messages.muted(
            "The gateway token secures communication between your agents and OpenClaw."
        )
        token = self._optional(
            self.presets.gateway_token,
            "Gateway token",
            secret=True,
            blank_hint="leave blank to auto-generate",
        )
        if token:
            messages.info("Using provided gateway token.")
            return token, False
        token = generate_token()
        messages.warn("Auto-generated gateway token (save this, required for login):")
        messages.console.print(f"  [bold]{token}[/]")
        return token, True

    def ask_device_auth(self) -> bool:
        """Return True when device auth should be disabled."""
        messages.section("Device Pairing / Auth")
        messages.muted("If disabled, users can access without manual SSH pairing approval.")
        disabled = self.presets.disable_device_auth
        if disabled is None and self.assume_yes:
            disabled = True
        if disabled is None:
            disabled = prompt_confirm(
                "Disable device auth and skip pairing requests?", default=True,
            )
        if disabled:
            messages.warn("Device auth disabled.")
        else:
            messages.info("Device auth enabled (manual approval required).")
        return disabled

    def run(self) -> WizardResult:
        """Ask every question in order and build the config."""
        api_key = self.ask_api_key()
        name = self.ask_name()
        tier = self.ask_resource()
        provider, provider_key, model, base_url = self.ask_provider()
        channel, channel_token, allow_list = self.ask_channel()
        port = self.ask_port()
        gateway_token, generated = self.ask_gateway_token()
        device_auth_disabled = self.ask_device_auth()
        config = DeploymentConfig(
            name=name,
            resource_tier=tier,
            provider=provider,
            provider_api_key=provider_key,
            model_name=model,
            provider_base_url=base_url,
            channel=channel,
            channel_token=channel_token,
            channel_allow_list=allow_list,
            gateway_port=port,
            gateway_token=gateway_token,
            device_auth_disabled=device_auth_disabled,
        )
        return WizardResult(api_key=api_key, config=config, token_generated=generated)


def review_rows(config: DeploymentConfig) -> dict[str, str]:
    """Summary shown before the final confirmation. Secrets are left out."""
    return {
        "Deployment name": config.name,
        "Resource size": config.resource_tier.resource_name,
        "Provider": provider_display_name(config.provider),
        "Model": config.model_name or "skip",
        "Channel": channel_display_name(config.channel),
        "Gateway port": str(config.gateway_port),
        "Device auth": "disabled" if config.device_auth_disabled else "enabled (pairing required)",
    }


def review(config: DeploymentConfig, *, assume_yes: bool = False) -> bool:
    """Print the review table and ask for confirmation."""
    messages.section("Review")
    messages.console.print(kv_table(review_rows(config)))
    messages.console.print()
    if assume_yes:
        return True
    return prompt_confirm("Proceed with deployment?", default=False)
