"""Poll-and-respond loop — answers chat messages that mention the bot."""

import asyncio
import sys
from datetime import datetime
from typing import Optional

from mention_relay.config import DEFAULT_POLL_INTERVAL
from mention_relay.domain.mention import is_mentioned, trim_mention
from mention_relay.domain.models import BotIdentity, Cursor, InboundMessage, InboundUpdate
from mention_relay.errors import CompletionError, DeliveryError, FetchError
from mention_relay.ports.inbound import ChatPort
from mention_relay.ports.outbound import LLMPort


class MentionRelay:
    """Relays mentions of the bot to an LLM and replies in-thread.

    Updates are handled one at a time, in the order the platform returns
    them. The cursor lives only in memory, so a restart replays whatever the
    platform still holds.
    """

    EMPTY_QUERY_REPLY = "I don't see text"
    ERROR_REPLY = "Sorry, I encountered an error processing your request."

    def __init__(
        self,
        chat: ChatPort,
        llm: LLMPort,
        identity: BotIdentity,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        cursor: Optional[Cursor] = None,
    ):
        self.chat = chat
        self.llm = llm
        self.identity = identity
        self.poll_interval = poll_interval
        self.cursor = cursor or Cursor()

    async def _reply(self, message: InboundMessage, text: str) -> bool:
        try:
            await self.chat.send_message(message.chat_id, text, message.message_id)
        except DeliveryError as e:
            print(
                f"[{datetime.now().isoformat()}] Reply to message {message.message_id} "
                f"in chat {message.chat_id} failed: {e}",
                file=sys.stderr,
            )
            return False
        return True

    async def handle_update(self, update: InboundUpdate) -> None:
        """Process one update. The cursor advances even when it is skipped."""
        self.cursor.advance(update.update_id)

        message = update.message
        if message is None or message.text is None:
            return
        handle = self.identity.handle
        if not is_mentioned(message.text, handle):
            return

        query = trim_mention(message.text, handle)
        if not query:
            await self._reply(message, self.EMPTY_QUERY_REPLY)
            return

        sender = f"@{message.sender}" if message.sender else "unknown sender"
        print(
            f"[{datetime.now().isoformat()}] Processing message from {sender} "
            f"in chat {message.chat_id}: {query[:50]}"
        )
        try:
            answer = await self.llm.complete(query)
        except CompletionError as e:
            print(f"[{datetime.now().isoformat()}] Completion failed: {e}", file=sys.stderr)
            await self._reply(message, self.ERROR_REPLY)
            return

        await self._reply(message, answer)

    async def poll_once(self) -> int:
        """Fetch one batch after the cursor and handle it. Returns the batch size.

        Raises FetchError when the poll itself fails.
        """
        updates = await self.chat.get_updates(self.cursor.next_offset)
        for update in updates:
            await self.handle_update(update)
        return len(updates)

    async def _idle(self, stop: asyncio.Event) -> None:
        try:
            await asyncio.wait_for(stop.wait(), timeout=self.poll_interval)
        except asyncio.TimeoutError:
            pass  # normal wake-up

    async def run(self, stop: Optional[asyncio.Event] = None) -> None:
        """Poll until stop is set. Fetch failures are retried after the idle pause."""
        if stop is None:
            stop = asyncio.Event()
        print(f"[{datetime.now().isoformat()}] Listening for mentions of @{self.identity.handle}")
        while not stop.is_set():
            try:
                await self.poll_once()
            except FetchError as e:
                print(f"[{datetime.now().isoformat()}] Poll failed: {e}", file=sys.stderr)
            await self._idle(stop)
        print(f"[{datetime.now().isoformat()}] Stopped at update {self.cursor.last_seen_id}")
