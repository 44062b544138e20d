"""Tests for session bootstrap and the process entry point."""

import asyncio
import signal

import pytest
from unittest.mock import AsyncMock, patch

from mention_relay.app import STOP_SIGNALS, _install_signal_handlers, bootstrap, main, serve
from mention_relay.config import RelayConfig
from mention_relay.domain.models import BotIdentity
from mention_relay.errors import IdentityFetchError
from mention_relay.relay import MentionRelay

ENV = {
    "TELEGRAM_TOKEN": "123:abc",
    "OPENAPI_BASEURL": "https://llm.example/v1/chat/completions",
    "OPENAPI_TOKEN": "sk-test",
    "OPENAPI_MODEL": "gpt-test",
    "POLL_INTERVAL": "0.25",
}

GET_ME = "mention_relay.app.TelegramClient.get_me"
GET_UPDATES = "mention_relay.app.TelegramClient.get_updates"


class TestBootstrap:
    @pytest.mark.asyncio
    async def test_builds_relay_with_identity(self):
        config = RelayConfig.from_env(ENV)
        with patch(GET_ME, AsyncMock(return_value=BotIdentity(handle="bob"))) as get_me:
            relay = await bootstrap(config)
        get_me.assert_awaited_once()
        assert isinstance(relay, MentionRelay)
        assert relay.identity.handle == "bob"
        assert relay.poll_interval == 0.25
        assert relay.cursor.last_seen_id == 0
        assert relay.llm.model == "gpt-test"
        assert relay.llm.system_prompt == "You are a helpful assistant."

    @pytest.mark.asyncio
    async def test_identity_failure_propagates(self):
        config = RelayConfig.from_env(ENV)
        with patch(GET_ME, AsyncMock(side_effect=IdentityFetchError("getMe failed (HTTP 401)"))):
            with pytest.raises(IdentityFetchError):
                await bootstrap(config)


class TestServe:
    @pytest.mark.asyncio
    async def test_preset_stop_returns_without_polling(self):
        config = RelayConfig.from_env(ENV)
        stop = asyncio.Event()
        stop.set()
        with patch(GET_ME, AsyncMock(return_value=BotIdentity(handle="bob"))), \
                patch(GET_UPDATES, AsyncMock(return_value=[])) as get_updates:
            await serve(config, stop)
        get_updates.assert_not_awaited()


class TestMain:
    def test_missing_config_exits_nonzero(self, capsys):
        with patch(GET_ME, AsyncMock()) as get_me:
            assert main({}) == 1
        get_me.assert_not_awaited()
        assert "TELEGRAM_TOKEN" in capsys.readouterr().err

    def test_identity_failure_exits_nonzero(self, capsys):
        with patch(GET_ME, AsyncMock(side_effect=IdentityFetchError("getMe failed: refused"))):
            assert main(ENV) == 1
        assert "refused" in capsys.readouterr().err


class FakeLoop:
    """Records signal handler registration like an asyncio loop on Unix."""

    def __init__(self):
        self.handlers = {}
        self.removed = []

    def add_signal_handler(self, sig, callback):
        self.handlers[sig] = callback

    def remove_signal_handler(self, sig):
        self.removed.append(sig)
        return self.handlers.pop(sig, None) is not None


class NoSignalsLoop:
    def add_signal_handler(self, sig, callback):
        raise NotImplementedError


class TestSignalHandlers:
    def test_installs_for_sigint_and_sigterm(self):
        loop = FakeLoop()
        _install_signal_handlers(asyncio.Event(), loop=loop)
        assert set(loop.handlers) == {signal.SIGINT, signal.SIGTERM}

    def test_first_signal_sets_stop_and_restores_defaults(self, capsys):
        loop, stop = FakeLoop(), asyncio.Event()
        _install_signal_handlers(stop, loop=loop)

        loop.handlers[signal.SIGINT]()

        assert stop.is_set()
        assert loop.handlers == {}
        assert sorted(loop.removed) == sorted(STOP_SIGNALS)
        assert "Shutting down" in capsys.readouterr().err

    def test_unsupported_loop_is_tolerated(self):
        stop = asyncio.Event()
        _install_signal_handlers(stop, loop=NoSignalsLoop())
        assert not stop.is_set()
