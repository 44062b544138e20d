"""Domain layer — pure Python, no framework dependencies."""

from mention_relay.domain.models import (
    BotIdentity,
    CompletionReply,
    CompletionRequest,
    Cursor,
    InboundMessage,
    InboundUpdate,
)
from mention_relay.domain.mention import is_mentioned, trim_mention

__all__ = [
    "BotIdentity",
    "CompletionReply",
    "CompletionRequest",
    "Cursor",
    "InboundMessage",
    "InboundUpdate",
    "is_mentioned",
    "trim_mention",
]
