"""Notifier protocol implemented by message senders."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from stargram.telegram.models import DeliveryResult


@typ.runtime_checkable
class Notifier(typ.Protocol):
    """Protocol for delivering rendered text to a chat.

    Implementations make exactly one delivery attempt per call and report
    failures through the returned ``DeliveryResult`` rather than raising.

    Examples
    --------
    >>> from stargram.telegram import Notifier, TelegramNotifier
    >>> isinstance(TelegramNotifier(config), Notifier)
    True

    """

    async def send(self, text: str) -> DeliveryResult:
        """Deliver ``text`` and return the classified outcome."""
        ...

    async def aclose(self) -> None:
        """Release any owned network resources."""
        ...
