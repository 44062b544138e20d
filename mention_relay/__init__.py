"""Mention Relay — answers Telegram mentions with an OpenAI-compatible model."""

from mention_relay.config import __version__, RelayConfig, TelegramConfig, CompletionConfig
from mention_relay.errors import (
    RelayError,
    ConfigurationError,
    IdentityFetchError,
    FetchError,
    CompletionError,
    DeliveryError,
)
from mention_relay.domain import BotIdentity, Cursor, InboundMessage, InboundUpdate
from mention_relay.domain.mention import is_mentioned, trim_mention
from mention_relay.adapters.telegram import TelegramClient
from mention_relay.adapters.llm import OpenAIAdapter, query_openai
from mention_relay.relay import MentionRelay

__all__ = [
    "__version__",
    "RelayConfig",
    "TelegramConfig",
    "CompletionConfig",
    "RelayError",
    "ConfigurationError",
    "IdentityFetchError",
    "FetchError",
    "CompletionError",
    "DeliveryError",
    "BotIdentity",
    "Cursor",
    "InboundMessage",
    "InboundUpdate",
    "is_mentioned",
    "trim_mention",
    "TelegramClient",
    "OpenAIAdapter",
    "query_openai",
    "MentionRelay",
]
