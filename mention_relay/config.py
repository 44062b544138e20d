"""Configuration loaded from environment variables."""

__version__ = "0.1.0"

import math
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import load_dotenv

from mention_relay.errors import ConfigurationError

load_dotenv()

DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant."
DEFAULT_TELEGRAM_API_BASE = "https://api.telegram.org"
DEFAULT_POLL_TIMEOUT = 30
DEFAULT_POLL_INTERVAL = 1.0
DEFAULT_COMPLETION_TIMEOUT = 60.0

# Required variables, in the order they are reported when missing.
REQUIRED_ENV = (
    "TELEGRAM_TOKEN",
    "OPENAPI_BASEURL",
    "OPENAPI_TOKEN",
    "OPENAPI_MODEL",
)


def _number(env: Mapping[str, str], name: str, default, cast, positive=False):
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None
    if not math.isfinite(value):
        raise ConfigurationError(f"{name} must be finite, got {raw!r}")
    if positive and value <= 0:
        raise ConfigurationError(f"{name} must be greater than zero, got {raw!r}")
    if value < 0:
        raise ConfigurationError(f"{name} must not be negative, got {raw!r}")
    return value


@dataclass
class TelegramConfig:
    token: str = ""
    api_base: str = DEFAULT_TELEGRAM_API_BASE
    poll_timeout: int = DEFAULT_POLL_TIMEOUT


@dataclass
class CompletionConfig:
    base_url: str = ""
    token: str = ""
    model: str = ""
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    timeout: float = DEFAULT_COMPLETION_TIMEOUT


@dataclass
class RelayConfig:
    """Typed configuration for one relay process."""

    telegram: TelegramConfig = field(default_factory=TelegramConfig)
    completion: CompletionConfig = field(default_factory=CompletionConfig)
    poll_interval: float = DEFAULT_POLL_INTERVAL

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "RelayConfig":
        """Create RelayConfig from environment variables.

        Raises ConfigurationError listing every required variable that is
        unset or blank.
        """
        if env is None:
            env = os.environ

        missing = [name for name in REQUIRED_ENV if not env.get(name, "").strip()]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        return cls(
            telegram=TelegramConfig(
                token=env["TELEGRAM_TOKEN"].strip(),
                api_base=(
                    env.get("TELEGRAM_API_BASE", "").strip().rstrip("/")
                    or DEFAULT_TELEGRAM_API_BASE
                ),
                poll_timeout=_number(env, "POLL_TIMEOUT", DEFAULT_POLL_TIMEOUT, int),
            ),
            completion=CompletionConfig(
                base_url=env["OPENAPI_BASEURL"].strip(),
                token=env["OPENAPI_TOKEN"].strip(),
                model=env["OPENAPI_MODEL"].strip(),
                system_prompt=env.get("SYSTEM_MSG") or DEFAULT_SYSTEM_PROMPT,
                timeout=_number(
                    env, "COMPLETION_TIMEOUT", DEFAULT_COMPLETION_TIMEOUT, float, positive=True
                ),
            ),
            poll_interval=_number(env, "POLL_INTERVAL", DEFAULT_POLL_INTERVAL, float),
        )
