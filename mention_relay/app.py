"""Process entry point: bootstrap the session and run the relay loop."""

import asyncio
import signal
import sys
from datetime import datetime
from typing import Optional

from mention_relay.adapters.llm.openai_adapter import OpenAIAdapter
from mention_relay.adapters.telegram.client import TelegramClient
from mention_relay.config import RelayConfig
from mention_relay.errors import ConfigurationError, IdentityFetchError
from mention_relay.relay import MentionRelay

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)


async def bootstrap(config: RelayConfig) -> MentionRelay:
    """Fetch the bot identity once and wire up the relay.

    Raises IdentityFetchError if getMe fails.
    """
    chat = TelegramClient(
        config.telegram.token,
        api_base=config.telegram.api_base,
        poll_timeout=config.telegram.poll_timeout,
    )
    llm = OpenAIAdapter(
        config.completion.base_url,
        config.completion.token,
        config.completion.model,
        system_prompt=config.completion.system_prompt,
        timeout=config.completion.timeout,
    )

    print(f"[{datetime.now().isoformat()}] Starting bot...")
    identity = await chat.get_me()
    print(f"[{datetime.now().isoformat()}] Bot username: @{identity.handle}")
    print(f"[{datetime.now().isoformat()}] Model: {config.completion.model}")

    return MentionRelay(chat, llm, identity, poll_interval=config.poll_interval)


STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def _install_signal_handlers(stop: asyncio.Event, loop=None) -> None:
    """Set stop on the first SIGINT/SIGTERM, then restore default handling.

    A second signal during a long poll therefore ends the process.
    """
    if loop is None:
        loop = asyncio.get_running_loop()

    def _on_signal() -> None:
        _stderr_print(f"[{datetime.now().isoformat()}] Shutting down (signal again to force)")
        stop.set()
        for sig in STOP_SIGNALS:
            loop.remove_signal_handler(sig)

    for sig in STOP_SIGNALS:
        try:
            loop.add_signal_handler(sig, _on_signal)
        except NotImplementedError:
            # Windows event loops; Ctrl+C then surfaces as KeyboardInterrupt.
            return


async def serve(config: RelayConfig, stop: Optional[asyncio.Event] = None) -> None:
    relay = await bootstrap(config)
    if stop is None:
        stop = asyncio.Event()
        _install_signal_handlers(stop)
    await relay.run(stop)


def main(env=None) -> int:
    """Run the relay. Returns the process exit code."""
    try:
        config = RelayConfig.from_env(env)
    except ConfigurationError as e:
        _stderr_print(f"ERROR: {e}")
        return 1

    try:
        asyncio.run(serve(config))
    except IdentityFetchError as e:
        _stderr_print(f"ERROR: could not fetch bot identity: {e}")
        return 1
    except KeyboardInterrupt:
        pass
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
