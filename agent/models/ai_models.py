"""
AI Provider Registry.

Single source of truth for the supported providers and their defaults.
"""

from dataclasses import dataclass
from enum import Enum


class Provider(str, Enum):
    CLAUDE = "CLAUDE"
    OPENAI = "OPENAI"
    DEEPSEEK = "DEEPSEEK"
    QWEN = "QWEN"
    CUSTOM = "CUSTOM"
    DEEPINFRA = "DEEPINFRA"


@dataclass
class ProviderDefaults:
    """Default connection settings for a provider."""

    provider: Provider
    display_name: str
    default_model: str  # "" when the user must supply one
    base_url: str       # "" when the user must supply one


PROVIDER_DEFAULTS: dict[Provider, ProviderDefaults] = {
    Provider.CLAUDE: ProviderDefaults(
        provider=Provider.CLAUDE,
        display_name="Anthropic Claude",
        default_model="claude-sonnet-4-5-20250929",
        base_url="https://api.anthropic.com/v1",
    ),
    Provider.OPENAI: ProviderDefaults(
        provider=Provider.OPENAI,
        display_name="OpenAI",
        default_model="gpt-4.1-mini",
        base_url="https://api.openai.com/v1",
    ),
    Provider.DEEPSEEK: ProviderDefaults(
        provider=Provider.DEEPSEEK,
        display_name="DeepSeek",
        default_model="deepseek-chat",
        base_url="https://api.deepseek.com",
    ),
    Provider.QWEN: ProviderDefaults(
        provider=Provider.QWEN,
        display_name="Alibaba Qwen",
        default_model="qwen-vl-max",
        base_url="https://dashscope-intl.aliyuncs.com/compatible-mode/v1",
    ),
    Provider.CUSTOM: ProviderDefaults(
        provider=Provider.CUSTOM,
        display_name="Custom OpenAI-compatible",
        default_model="",
        base_url="",
    ),
    Provider.DEEPINFRA: ProviderDefaults(
        provider=Provider.DEEPINFRA,
        display_name="DeepInfra",
        default_model="meta-llama/Llama-3.3-70B-Instruct",
        base_url="https://api.deepinfra.com/v1/openai",
    ),
}


def parse_provider(value: str) -> Provider:
    """Resolve a provider name (case-insensitive). Raises ValueError if unknown."""
    try:
        return Provider(value.strip().upper())
    except ValueError:
        known = ", ".join(p.value for p in Provider)
        raise ValueError(f"Unknown AI provider '{value}'. Known: {known}") from None


def get_defaults(provider: Provider) -> ProviderDefaults:
    return PROVIDER_DEFAULTS[provider]
