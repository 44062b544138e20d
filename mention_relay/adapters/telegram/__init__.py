"""Telegram adapter — Bot API client implementing ChatPort."""

from mention_relay.adapters.telegram.client import TelegramClient

__all__ = ["TelegramClient"]
