"""Lifespan middleware releasing the notifier's network resources.

Falcon ASGI calls ``process_shutdown`` once when the server stops; the
notifier's pooled ``httpx.AsyncClient`` is closed there instead of per request.

Usage
-----
Register the middleware when creating the Falcon app::

    app = falcon.asgi.App(middleware=[NotifierLifespan(notifier)])

"""

from __future__ import annotations

import typing as typ

import httpx

from stargram.logging import get_logger, log_error, log_info

if typ.TYPE_CHECKING:
    from stargram.telegram import Notifier

__all__ = ["NotifierLifespan"]

logger = get_logger(__name__)


class NotifierLifespan:
    """Falcon middleware tying the notifier to the ASGI lifespan.

    Parameters
    ----------
    notifier
        Notifier whose resources are released on shutdown.

    """

    def __init__(self, notifier: Notifier) -> None:
        """Initialise the middleware with the notifier to manage."""
        self._notifier = notifier

    async def process_startup(
        self,
        _scope: dict[str, typ.Any],
        _event: dict[str, typ.Any],
    ) -> None:
        """Log that the webhook relay is accepting requests."""
        log_info(logger, "Webhook relay ready on POST /webhook")

    async def process_shutdown(
        self,
        _scope: dict[str, typ.Any],
        _event: dict[str, typ.Any],
    ) -> None:
        """Close the notifier, logging transport errors raised while closing."""
        try:
            await self._notifier.aclose()
        except httpx.HTTPError:
            log_error(logger, "Closing the notifier failed", exc_info=True)
            raise
