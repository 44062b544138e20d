"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BotIdentity:
    """The bot's own handle, fetched once at startup."""

    handle: str


@dataclass
class Cursor:
    """Last-seen update id. Only ever moves forward."""

    last_seen_id: int = 0

    @property
    def next_offset(self) -> int:
        return self.last_seen_id + 1

    def advance(self, update_id: int) -> int:
        self.last_seen_id = max(self.last_seen_id, update_id)
        return self.last_seen_id


@dataclass
class InboundMessage:
    message_id: int
    chat_id: int
    text: Optional[str] = None  # None for photos, stickers, etc.
    sender: Optional[str] = None


@dataclass
class InboundUpdate:
    update_id: int
    message: Optional[InboundMessage] = None


@dataclass(frozen=True)
class CompletionRequest:
    model: str
    system_prompt: str
    user_text: str

    def to_payload(self) -> dict:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": self.user_text},
            ],
        }


@dataclass(frozen=True)
class CompletionReply:
    text: str
