"""Pydantic models for the Telegram Bot API payloads the relay reads.

Only the fields the relay uses are declared; everything else in a payload is
ignored.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from mention_relay.domain.models import InboundMessage, InboundUpdate


class TelegramChat(BaseModel):
    id: int


class TelegramUser(BaseModel):
    id: Optional[int] = None
    username: Optional[str] = None


class TelegramMessage(BaseModel):
    message_id: int
    chat: TelegramChat
    text: Optional[str] = None
    sender: Optional[TelegramUser] = Field(default=None, alias="from")

    def to_domain(self) -> InboundMessage:
        return InboundMessage(
            message_id=self.message_id,
            chat_id=self.chat.id,
            text=self.text,
            sender=self.sender.username if self.sender else None,
        )


class TelegramUpdate(BaseModel):
    update_id: int
    message: Optional[TelegramMessage] = None

    def to_domain(self) -> InboundUpdate:
        return InboundUpdate(
            update_id=self.update_id,
            message=self.message.to_domain() if self.message else None,
        )


class BotUser(BaseModel):
    username: str


class GetMeResponse(BaseModel):
    ok: bool = True
    result: BotUser


class GetUpdatesResponse(BaseModel):
    """Envelope only; entries are validated one by one so a bad one can be skipped."""

    ok: bool = True
    result: List[Dict[str, Any]] = Field(default_factory=list)
    description: Optional[str] = None
