"""Fixed facts about the supported providers, channels, and resource tiers."""

from __future__ import annotations

from dataclasses import dataclass

from openclaw_installer.config.models import Channel, Provider, ResourceTier


@dataclass(frozen=True)
class ProviderInfo:
    """Environment and default values for one model provider."""

    display_name: str
    env_key: str
    default_model: str
    default_base_url: str | None = None
    base_url_env: str | None = None


@dataclass(frozen=True)
class ChannelInfo:
    """Environment names and prompt labels for one messaging channel."""

    display_name: str
    menu_label: str
    allow_from_env: str
    allow_from_hint: str
    token_env: str | None = None
    enabled_env: str | None = None

    @property
    def needs_token(self) -> bool:
        return self.token_env is not None


PROVIDERS: dict[Provider, ProviderInfo] = {
    Provider.OPENAI: ProviderInfo(
        display_name="OpenAI",
        env_key="OPENAI_API_KEY",
        default_model="openai/gpt-4o",
    ),
    Provider.ANTHROPIC: ProviderInfo(
        display_name="Anthropic",
        env_key="ANTHROPIC_API_KEY",
        default_model="anthropic/claude-sonnet-4-20250514",
    ),
    Provider.GOOGLE: ProviderInfo(
        display_name="Google",
        env_key="GOOGLE_API_KEY",
        default_model="google/gemini-2.0-flash",
    ),
    # OpenAI-compatible endpoint; the container needs the base URL to
    # build its models.providers section.
    Provider.SYBILL: ProviderInfo(
        display_name="Sybill",
        env_key="SYBILL_API_KEY",
        default_model="zai-org/GLM-4.6",
        default_base_url="https://api.sybil.com/v1",
        base_url_env="SYBILL_BASE_URL",
    ),
}

CHANNELS: dict[Channel, ChannelInfo] = {
    Channel.TELEGRAM: ChannelInfo(
        display_name="Telegram",
        menu_label="Telegram (Bot API)",
        token_env="TELEGRAM_BOT_TOKEN",
        allow_from_env="OPENCLAW_TELEGRAM_ALLOW_FROM",
        allow_from_hint="comma-separated, e.g. tg:123,tg:456",
    ),
    Channel.WHATSAPP: ChannelInfo(
        display_name="WhatsApp",
        menu_label="WhatsApp (QR link)",
        enabled_env="OPENCLAW_WHATSAPP_ENABLED",
        allow_from_env="OPENCLAW_WHATSAPP_ALLOW_FROM",
        allow_from_hint="comma-separated, e.g. +15550001,+44770002",
    ),
    Channel.DISCORD: ChannelInfo(
        display_name="Discord",
        menu_label="Discord (Bot API)",
        token_env="DISCORD_BOT_TOKEN",
        allow_from_env="OPENCLAW_DISCORD_ALLOW_FROM",
        allow_from_hint="comma-separated IDs/usernames",
    ),
}

# Menu order is part of the prompt contract: "1" is always the first entry.
RESOURCE_MENU: list[ResourceTier] = [
    ResourceTier.SMALL,
    ResourceTier.MEDIUM,
    ResourceTier.LARGE,
    ResourceTier.XLARGE,
]
PROVIDER_MENU: list[Provider] = [
    Provider.OPENAI,
    Provider.ANTHROPIC,
    Provider.GOOGLE,
    Provider.SYBILL,
    Provider.NONE,
]
CHANNEL_MENU: list[Channel] = [
    Channel.TELEGRAM,
    Channel.WHATSAPP,
    Channel.DISCORD,
    Channel.NONE,
]


def provider_display_name(provider: Provider) -> str:
    info = PROVIDERS.get(provider)
    return info.display_name if info else "skip"


def channel_display_name(channel: Channel) -> str:
    info = CHANNELS.get(channel)
    return info.display_name if info else "skip"
