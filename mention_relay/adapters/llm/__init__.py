"""LLM adapters — OpenAI-compatible completion endpoint."""

from mention_relay.adapters.llm.openai_adapter import OpenAIAdapter, query_openai

__all__ = [
    "OpenAIAdapter",
    "query_openai",
]
