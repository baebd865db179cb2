"""Map a DeploymentConfig onto the Targon deployment request."""

from __future__ import annotations

from typing import Any

from openclaw_installer.config.catalog import CHANNELS, PROVIDERS
from openclaw_installer.config.models import (
    DeploymentConfig,
    DeploymentRequest,
    EnvEntry,
    PortSpec,
)


class EnvBuilder:
    """Ordered env list that refuses duplicate names.

    The container entrypoint patches its config by scanning this list, so
    a repeated name would be ambiguous.
    """

    def __init__(self) -> None:
        self.entries: list[EnvEntry] = []
        self._names: set[str] = set()

    def add(self, name: str, value: str, *, secret: bool = False) -> None:
        if name in self._names:
            raise ValueError(f"Duplicate env entry: {name}")
        self._names.add(name)
        self.entries.append(EnvEntry(name=name, value=value, secret=secret))

    def add_if(self, name: str, value: str | None, *, secret: bool = False) -> None:
        if value:
            self.add(name, value, secret=secret)


def build_env(config: DeploymentConfig) -> list[EnvEntry]:
    """Build the container env list for *config*.

    Order: provider key, provider, model, gateway token, gateway port,
    device-auth flag, channel, channel token, provider extras, channel
    extras.
    """
    env = EnvBuilder()
    provider = PROVIDERS.get(config.provider)
    channel = CHANNELS.get(config.channel)

    if provider is not None:
        env.add_if(provider.env_key, config.provider_api_key, secret=True)
        env.add("OPENCLAW_DEFAULT_PROVIDER", config.provider.value)
        env.add_if("OPENCLAW_DEFAULT_MODEL", config.model_name)

    env.add("OPENCLAW_GATEWAY_TOKEN", config.gateway_token, secret=True)
    env.add("OPENCLAW_GATEWAY_PORT", str(config.gateway_port))
    env.add("DISABLE_DEVICE_AUTH", "true" if config.device_auth_disabled else "false")

    if channel is not None:
        env.add("OPENCLAW_CHANNEL", config.channel.value)
        env.add_if("OPENCLAW_CHANNEL_TOKEN", config.channel_token, secret=True)

    if provider is not None and provider.base_url_env:
        env.add_if(
            provider.base_url_env,
            config.provider_base_url or provider.default_base_url,
        )

    if channel is not None:
        if channel.token_env:
            env.add_if(channel.token_env, config.channel_token, secret=True)
        if channel.enabled_env:
            env.add(channel.enabled_env, "true")
        if config.channel_allow_list:
            env.add(channel.allow_from_env, ",".join(config.channel_allow_list))

    return env.entries


def build_request(config: DeploymentConfig) -> DeploymentRequest:
    """Build the full ``POST`` body for *config*."""
    return DeploymentRequest(
        name=config.name,
        resource_name=config.resource_tier.resource_name,
        env=build_env(config),
        ports=[PortSpec(port=config.gateway_port)],
    )


def build_payload(config: DeploymentConfig) -> dict[str, Any]:
    """JSON-ready request body for *config*."""
    return build_request(config).model_dump(mode="json")


def masked_payload(request: DeploymentRequest) -> dict[str, Any]:
    """Request body with secret env values masked, for display."""
    data = request.model_dump(mode="json")
    for entry, raw in zip(request.env, data["env"]):
        if entry.secret:
            raw["value"] = mask_secret(entry.value)
    return data


def mask_secret(value: str) -> str:
    return value[:4] + "..." if len(value) > 8 else "***"
