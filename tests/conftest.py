"""Shared test fixtures."""

from __future__ import annotations

import pytest

from openclaw_installer.config.constants import (
    DEFAULT_DEPLOY_URL,
    ENV_API_KEY,
    ENV_DEPLOY_URL,
)
from openclaw_installer.config.models import Channel, DeploymentConfig, Provider
from openclaw_installer.config.settings import InstallerSettings

GATEWAY_TOKEN = "a" * 64


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's Targon environment out of the tests."""
    monkeypatch.delenv(ENV_DEPLOY_URL, raising=False)
    monkeypatch.delenv(ENV_API_KEY, raising=False)


@pytest.fixture
def deploy_url() -> str:
    return DEFAULT_DEPLOY_URL


@pytest.fixture
def settings() -> InstallerSettings:
    """Settings pointing at the default endpoint with a test key."""
    return InstallerSettings(api_key="targon-test-key")


@pytest.fixture
def minimal_config() -> DeploymentConfig:
    """No provider, no channel, default port."""
    return DeploymentConfig(
        name="my-bot",
        provider=Provider.NONE,
        channel=Channel.NONE,
        gateway_port=18789,
        gateway_token=GATEWAY_TOKEN,
    )


@pytest.fixture
def full_config() -> DeploymentConfig:
    """Sybill provider with a Telegram channel and an allow-list."""
    return DeploymentConfig(
        name="full-bot",
        provider=Provider.SYBILL,
        provider_api_key="syb-key",
        model_name="zai-org/GLM-4.6",
        channel=Channel.TELEGRAM,
        channel_token="tg-bot-token",
        channel_allow_list=["tg:123", "tg:456"],
        gateway_port=18789,
        gateway_token=GATEWAY_TOKEN,
    )
