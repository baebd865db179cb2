"""Installer settings: resolve the deploy endpoint and API key."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field, field_validator

from openclaw_installer.client.errors import ConfigurationError
from openclaw_installer.config.constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_DEPLOY_URL,
    DEFAULT_TIMEOUT,
    ENV_DEPLOY_URL,
)


class InstallerSettings(BaseModel):
    """Connection settings for the Targon deploy API."""

    deploy_url: str = Field(default=DEFAULT_DEPLOY_URL, description="Deployments endpoint")
    api_key: str | None = Field(default=None, repr=False, description="Targon API key")
    connect_timeout: float = Field(default=DEFAULT_CONNECT_TIMEOUT, gt=0)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, le=600)

    @field_validator("deploy_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")

    def status_url(self, deployment_uid: str) -> str:
        return f"{self.deploy_url}/{deployment_uid}"


def resolve_deploy_url(url: str | None = None) -> str:
    """Resolve the deploy endpoint.

    Precedence: CLI flag > ``TARGON_DEPLOY_URL`` > built-in default.
    """
    return url or os.environ.get(ENV_DEPLOY_URL) or DEFAULT_DEPLOY_URL


def resolve_settings(
    url: str | None = None,
    api_key: str | None = None,
) -> InstallerSettings:
    """Build validated settings, turning a bad endpoint into a ConfigurationError."""
    resolved_url = resolve_deploy_url(url)
    if not resolved_url.startswith(("http://", "https://")):
        raise ConfigurationError(
            f"Invalid deploy endpoint '{resolved_url}'. Set {ENV_DEPLOY_URL}"
            " or pass --deploy-url with an http:// or https:// URL."
        )
    return InstallerSettings(deploy_url=resolved_url, api_key=api_key)
