"""Telegram delivery for rendered star notifications.

Public API
----------
Notifier
    Protocol for single-attempt message delivery.
TelegramNotifier
    Telegram Bot API ``sendMessage`` implementation.
DeliveryResult
    Classified outcome of one delivery attempt.
"""

from __future__ import annotations

from stargram.telegram.client import PARSE_MODE, TelegramNotifier
from stargram.telegram.models import DeliveryResult
from stargram.telegram.protocol import Notifier

__all__ = ["PARSE_MODE", "DeliveryResult", "Notifier", "TelegramNotifier"]
