"""Port interfaces (Hexagonal Architecture)."""

from mention_relay.ports.inbound import ChatPort
from mention_relay.ports.outbound import LLMPort

__all__ = [
    "ChatPort",
    "LLMPort",
]
