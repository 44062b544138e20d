"""Outbound ports — interfaces for external system adapters."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class LLMPort(Protocol):
    """Interface for completion backends."""

    async def complete(self, user_text: str) -> str: ...
