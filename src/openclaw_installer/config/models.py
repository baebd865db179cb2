"""Pydantic models for the deployment configuration, request, and result."""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from openclaw_installer.config.constants import (
    DASHBOARD_URL_TEMPLATE,
    DEFAULT_GATEWAY_PORT,
    OPENCLAW_IMAGE,
    PORT_PROTOCOL,
    PORT_ROUTING_TYPE,
)

# DNS-label style: lowercase alphanumerics and hyphens, alphanumeric at
# both ends, 63 chars max.
DEPLOY_NAME_RE = re.compile(r"[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?")


def is_valid_deploy_name(name: str) -> bool:
    """Return True if *name* is usable as a Targon deployment name."""
    return DEPLOY_NAME_RE.fullmatch(name) is not None


class ResourceTier(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    XLARGE = "xlarge"

    @property
    def resource_name(self) -> str:
        return f"cpu-{self.value}"


class Provider(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    SYBILL = "sybill"
    NONE = "none"


class Channel(str, Enum):
    TELEGRAM = "telegram"
    WHATSAPP = "whatsapp"
    DISCORD = "discord"
    NONE = "none"


class DeploymentConfig(BaseModel):
    """Everything the wizard collects for one deployment."""

    name: str
    resource_tier: ResourceTier = ResourceTier.SMALL
    provider: Provider = Provider.NONE
    provider_api_key: str | None = Field(default=None, repr=False)
    model_name: str | None = None
    provider_base_url: str | None = None
    channel: Channel = Channel.NONE
    channel_token: str | None = Field(default=None, repr=False)
    channel_allow_list: list[str] = Field(default_factory=list)
    gateway_port: int = Field(default=DEFAULT_GATEWAY_PORT, ge=1, le=65535)
    gateway_token: str = Field(min_length=1, repr=False)
    device_auth_disabled: bool = True

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not is_valid_deploy_name(v):
            raise ValueError(
                "Invalid name. Use lowercase letters, numbers and hyphens"
                " (e.g. my-openclaw). Must start/end with alphanumeric."
            )
        return v

    @field_validator("channel_allow_list")
    @classmethod
    def strip_allow_list(cls, v: list[str]) -> list[str]:
        return [item.strip() for item in v if item.strip()]

    @model_validator(mode="after")
    def check_provider_key(self) -> DeploymentConfig:
        if self.provider is not Provider.NONE and not self.provider_api_key:
            raise ValueError(f"An API key is required for provider '{self.provider.value}'")
        return self


class EnvEntry(BaseModel):
    """A single name/value environment variable passed to the container."""

    name: str
    value: str
    secret: bool = Field(default=False, exclude=True)


class PortSpec(BaseModel):
    """An exposed container port."""

    port: int
    protocol: str = PORT_PROTOCOL
    routingType: str = PORT_ROUTING_TYPE


class DeploymentRequest(BaseModel):
    """Request body for ``POST <deploy-endpoint>``."""

    name: str
    image: str = OPENCLAW_IMAGE
    resource_name: str
    env: list[EnvEntry] = Field(default_factory=list)
    ports: list[PortSpec] = Field(default_factory=list)


class DeployResult(BaseModel):
    """Outcome of a deployment, merged from the submit and status responses."""

    deployment_uid: str | None = None
    name: str | None = None
    namespace: str | None = None
    capacity_warning: str | None = None
    error: str | None = None
    dns_mapping: dict[str, str] = Field(default_factory=dict)
    urls: list[str] = Field(default_factory=list)

    @property
    def dashboard_url(self) -> str | None:
        if not self.deployment_uid:
            return None
        return DASHBOARD_URL_TEMPLATE.format(uid=self.deployment_uid)
