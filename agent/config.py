"""
Relay configuration — read from environment variables.

A .env file is loaded first (without overriding variables that are already
set), then every setting is read with os.getenv:

    AI_PROVIDER=CLAUDE
    CLAUDE_API_KEY=sk-...
    CHAT_MODEL=claude-sonnet-4-5-20250929
    CACHE_BACKEND=memory
"""

import os
from dataclasses import dataclass
from pathlib import Path

from agent.models.ai_models import Provider, get_defaults, parse_provider

CACHE_BACKENDS = ("memory", "sqlite", "dynamodb")


def load_env_file(env_file: str = ".env") -> None:
    """Load .env file into os.environ."""
    path = Path(env_file)
    if not path.exists():
        return
    with open(path) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, value = line.split("=", 1)
                os.environ.setdefault(key.strip(), value.strip().strip('"').strip("'"))


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class RelayConfig:
    """Settings for one relay process."""

    provider: Provider = Provider.CLAUDE
    model: str = ""
    api_key: str = ""
    base_url: str = ""
    bot_name: str = "Roboto"

    # Conversation cache
    cache_backend: str = "memory"
    cache_ttl_seconds: int = 3600
    sqlite_path: str = "data/relay.db"
    dynamodb_table: str = ""
    aws_region: str = "us-east-1"
    use_bedrock: bool = False

    # Orchestration
    max_cycles: int = 5
    max_tokens: int = 2048

    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: str = ".env") -> "RelayConfig":
        load_env_file(env_file)

        provider = parse_provider(os.getenv("AI_PROVIDER", Provider.CLAUDE.value))
        defaults = get_defaults(provider)
        prefix = provider.value

        return cls(
            provider=provider,
            model=os.getenv("CHAT_MODEL", "") or defaults.default_model,
            api_key=os.getenv(f"{prefix}_API_KEY", ""),
            base_url=os.getenv(f"{prefix}_BASEURL", "") or defaults.base_url,
            bot_name=os.getenv("BOT_NAME", "Roboto"),
            cache_backend=os.getenv("CACHE_BACKEND", "memory").lower(),
            cache_ttl_seconds=int(os.getenv("CACHE_TTL_SECONDS", "3600")),
            sqlite_path=os.getenv("SQLITE_PATH", "data/relay.db"),
            dynamodb_table=os.getenv("DYNAMODB_TABLE", ""),
            aws_region=os.getenv("AWS_REGION", "us-east-1"),
            use_bedrock=_env_bool("USE_BEDROCK"),
            max_cycles=int(os.getenv("MAX_CYCLES", "5")),
            max_tokens=int(os.getenv("MAX_TOKENS", "2048")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> None:
        """Raise ValueError describing the first missing or invalid setting."""
        prefix = self.provider.value
        bedrock = self.use_bedrock and self.provider == Provider.CLAUDE

        if not self.api_key and not bedrock:
            raise ValueError(
                f"Using AI: '{prefix}'. The environment variable {prefix}_API_KEY must be set."
            )
        if self.provider == Provider.CUSTOM and (not self.base_url or not self.model):
            raise ValueError(
                "In CUSTOM mode CUSTOM_API_KEY, CUSTOM_BASEURL and CHAT_MODEL must be set."
            )
        if self.cache_backend not in CACHE_BACKENDS:
            raise ValueError(
                f"Unknown CACHE_BACKEND '{self.cache_backend}'. Known: {list(CACHE_BACKENDS)}"
            )
        if self.cache_backend == "dynamodb" and not self.dynamodb_table:
            raise ValueError("CACHE_BACKEND=dynamodb requires DYNAMODB_TABLE.")
        if self.max_cycles < 1:
            raise ValueError("MAX_CYCLES must be at least 1.")
