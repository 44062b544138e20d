"""Inbound port — the chat platform the relay listens on."""

from typing import List, Protocol, runtime_checkable

from mention_relay.domain.models import BotIdentity, InboundUpdate


@runtime_checkable
class ChatPort(Protocol):
    """Interface for a long-polling chat platform."""

    async def get_me(self) -> BotIdentity: ...

    async def get_updates(self, offset: int) -> List[InboundUpdate]: ...

    async def send_message(
        self,
        chat_id: int,
        text: str,
        reply_to_message_id: int,
    ) -> None: ...
