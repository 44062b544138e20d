"""Telegram Bot API client using aiohttp."""

import asyncio
import json
import sys
from datetime import datetime
from typing import Any, List, Optional, Type

import aiohttp
from pydantic import ValidationError

from mention_relay.adapters.telegram.schema import (
    GetMeResponse,
    GetUpdatesResponse,
    TelegramUpdate,
)
from mention_relay.config import DEFAULT_POLL_TIMEOUT, DEFAULT_TELEGRAM_API_BASE
from mention_relay.domain.models import BotIdentity, InboundUpdate
from mention_relay.errors import (
    DeliveryError,
    FetchError,
    IdentityFetchError,
    RelayError,
)

# Extra client-side slack on top of the server-side long-poll hold.
LONG_POLL_GRACE_SECONDS = 10
REQUEST_TIMEOUT_SECONDS = 10.0


def _describe(e: Exception) -> str:
    return str(e) or type(e).__name__


class TelegramClient:
    """Async Telegram Bot API client (getMe, long-poll getUpdates, sendMessage).

    Implements ChatPort. Every call opens its own session; the relay makes at
    most one call at a time.
    """

    def __init__(
        self,
        token: str,
        api_base: str = DEFAULT_TELEGRAM_API_BASE,
        poll_timeout: int = DEFAULT_POLL_TIMEOUT,
    ):
        self._token = token
        self._api_base = api_base.rstrip("/")
        self.poll_timeout = poll_timeout

    def _url(self, method: str) -> str:
        return f"{self._api_base}/bot{self._token}/{method}"

    async def _call(
        self,
        method: str,
        error_cls: Type[RelayError],
        timeout: float,
        params: Optional[dict] = None,
        body: Optional[str] = None,
    ) -> Any:
        """Issue one Bot API call and return the decoded JSON body.

        GET when body is None, otherwise POST with a JSON body. Transport
        failures, HTTP errors and undecodable bodies raise error_cls.
        """
        url = self._url(method)
        client_timeout = aiohttp.ClientTimeout(total=timeout)
        try:
            async with aiohttp.ClientSession(timeout=client_timeout) as session:
                if body is None:
                    request = session.get(url, params=params)
                else:
                    request = session.post(
                        url,
                        data=body,
                        headers={"Content-Type": "application/json"},
                    )
                async with request as resp:
                    if resp.status >= 400:
                        text = await resp.text()
                        raise error_cls(f"{method} failed (HTTP {resp.status}): {text}")
                    return await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise error_cls(f"{method} failed: {_describe(e)}") from e

    async def get_me(self) -> BotIdentity:
        """Fetch the bot's own handle."""
        data = await self._call("getMe", IdentityFetchError, REQUEST_TIMEOUT_SECONDS)
        try:
            parsed = GetMeResponse.model_validate(data)
        except ValidationError as e:
            raise IdentityFetchError(f"getMe returned no username: {data!r}") from e
        if not parsed.ok or not parsed.result.username:
            raise IdentityFetchError(f"getMe returned no username: {data!r}")
        return BotIdentity(handle=parsed.result.username)

    async def get_updates(self, offset: int) -> List[InboundUpdate]:
        """Long-poll for updates with update_id >= offset.

        An entry whose message cannot be decoded comes back with message=None
        so the caller still advances past it. Entries without a usable
        update_id are dropped.
        """
        params = {"offset": str(offset), "timeout": str(self.poll_timeout)}
        data = await self._call(
            "getUpdates",
            FetchError,
            self.poll_timeout + LONG_POLL_GRACE_SECONDS,
            params=params,
        )
        try:
            parsed = GetUpdatesResponse.model_validate(data)
        except ValidationError as e:
            raise FetchError(f"getUpdates returned an unexpected body: {e}") from e
        if not parsed.ok:
            raise FetchError(f"getUpdates not ok: {parsed.description or data!r}")

        updates = []
        for entry in parsed.result:
            try:
                updates.append(TelegramUpdate.model_validate(entry).to_domain())
            except ValidationError:
                update_id = entry.get("update_id")
                if isinstance(update_id, int) and not isinstance(update_id, bool):
                    print(
                        f"[{datetime.now().isoformat()}] Update {update_id}: "
                        "undecodable message, skipping",
                        file=sys.stderr,
                    )
                    updates.append(InboundUpdate(update_id=update_id))
                else:
                    print(
                        f"[{datetime.now().isoformat()}] Dropping update without "
                        f"update_id: {entry!r}",
                        file=sys.stderr,
                    )
        return updates

    async def send_message(
        self,
        chat_id: int,
        text: str,
        reply_to_message_id: int,
    ) -> None:
        """Post text as a reply to reply_to_message_id in chat_id."""
        body = json.dumps(
            {
                "chat_id": chat_id,
                "text": text,
                "reply_to_message_id": reply_to_message_id,
            }
        )
        data = await self._call(
            "sendMessage", DeliveryError, REQUEST_TIMEOUT_SECONDS, body=body
        )
        if not isinstance(data, dict) or not data.get("ok", False):
            raise DeliveryError(f"sendMessage not ok: {data!r}")
