"""Telegram Bot API integration (owner alerts)."""

from app.infra.telegram.notifier import TelegramNotifier

__all__ = ["TelegramNotifier"]
