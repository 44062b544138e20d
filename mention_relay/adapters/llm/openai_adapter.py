"""OpenAI-compatible chat completion adapter — implements LLMPort."""

import asyncio
from typing import List

import aiohttp
from pydantic import BaseModel, ValidationError

from mention_relay.config import DEFAULT_COMPLETION_TIMEOUT, DEFAULT_SYSTEM_PROMPT
from mention_relay.domain.models import CompletionReply, CompletionRequest
from mention_relay.errors import CompletionError


class ChoiceMessage(BaseModel):
    content: str


class Choice(BaseModel):
    message: ChoiceMessage


class ChatCompletionResponse(BaseModel):
    choices: List[Choice]


def parse_completion(data) -> CompletionReply:
    """Read choices[0].message.content from a decoded response body."""
    try:
        parsed = ChatCompletionResponse.model_validate(data)
    except ValidationError as e:
        raise CompletionError(f"Unexpected completion response: {e}") from e
    if not parsed.choices:
        raise CompletionError("Completion response has an empty choices list")
    return CompletionReply(text=parsed.choices[0].message.content)


async def query_openai(
    base_url: str,
    token: str,
    model: str,
    system_prompt: str,
    user_text: str,
    timeout: float = DEFAULT_COMPLETION_TIMEOUT,
) -> str:
    """POST one chat completion request to base_url and return the reply text.

    No retry and no streaming. Raises CompletionError on any failure.
    """
    request = CompletionRequest(
        model=model,
        system_prompt=system_prompt,
        user_text=user_text,
    )
    headers = {"Authorization": f"Bearer {token}"}
    try:
        async with aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=timeout)
        ) as session:
            async with session.post(
                base_url, json=request.to_payload(), headers=headers
            ) as resp:
                if resp.status >= 400:
                    body = await resp.text()
                    raise CompletionError(
                        f"Completion request failed (HTTP {resp.status}): {body}"
                    )
                data = await resp.json(content_type=None)
    except asyncio.TimeoutError as e:
        raise CompletionError(f"Completion request timed out ({timeout}s)") from e
    except (aiohttp.ClientError, ValueError) as e:
        raise CompletionError(f"Completion request failed: {e}") from e
    return parse_completion(data).text


class OpenAIAdapter:
    """Completion backend bound to one endpoint, model and system prompt."""

    def __init__(
        self,
        base_url: str,
        token: str,
        model: str,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        timeout: float = DEFAULT_COMPLETION_TIMEOUT,
    ):
        self.base_url = base_url
        self.model = model
        self.system_prompt = system_prompt
        self.timeout = timeout
        self._token = token

    async def complete(self, user_text: str) -> str:
        return await query_openai(
            self.base_url,
            self._token,
            self.model,
            self.system_prompt,
            user_text,
            timeout=self.timeout,
        )
