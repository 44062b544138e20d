"""Tests for port protocol conformance.

Verifies that the adapters implement the interfaces the relay depends on.
"""

import pytest

from mention_relay.adapters.llm.openai_adapter import OpenAIAdapter
from mention_relay.adapters.telegram.client import TelegramClient
from mention_relay.ports import ChatPort, LLMPort


class TestChatPortConformance:
    def test_telegram_client_is_chat_port(self):
        assert isinstance(TelegramClient("t"), ChatPort)

    def test_plain_object_is_not_chat_port(self):
        assert not isinstance(object(), ChatPort)


class TestLLMPortConformance:
    def test_openai_adapter_is_llm_port(self):
        adapter = OpenAIAdapter("https://llm.example", "t", "m")
        assert isinstance(adapter, LLMPort)

    def test_telegram_client_is_not_llm_port(self):
        assert not isinstance(TelegramClient("t"), LLMPort)
