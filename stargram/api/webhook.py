"""Falcon resource exposing the dispatcher at ``POST /webhook``.

Usage
-----
Register the resource on the Falcon app::

    app.add_route("/webhook", WebhookResource(dispatcher))

"""

from __future__ import annotations

import typing as typ

import falcon

from stargram.dispatch import WebhookDelivery
from stargram.events import EVENT_HEADER
from stargram.signature import SIGNATURE_HEADER

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from stargram.dispatch import WebhookDispatcher

__all__ = ["WEBHOOK_ROUTE", "WebhookResource"]

WEBHOOK_ROUTE = "/webhook"


class WebhookResource:
    """Receive GitHub webhook deliveries.

    Only ``POST`` is served. Other methods fall through to Falcon's
    method-not-allowed handling, which the app maps to ``404 Not found``.

    """

    def __init__(self, dispatcher: WebhookDispatcher) -> None:
        """Configure the resource with the dispatch pipeline.

        Parameters
        ----------
        dispatcher
            Pipeline that turns a buffered delivery into an outcome.

        """
        self._dispatcher = dispatcher

    async def on_post(self, req: Request, resp: Response) -> None:
        """Handle POST /webhook.

        The body is read in full before dispatching because the signature
        covers every byte.

        Parameters
        ----------
        req
            Falcon request carrying the webhook delivery.
        resp
            Falcon response populated from the dispatch outcome.

        """
        raw_body = await req.stream.read()
        delivery = WebhookDelivery(
            raw_body=raw_body,
            signature=req.get_header(SIGNATURE_HEADER),
            event_type=req.get_header(EVENT_HEADER),
        )

        outcome = await self._dispatcher.dispatch(delivery)

        resp.status = outcome.status
        resp.content_type = falcon.MEDIA_TEXT
        resp.text = outcome.body

    async def on_options(self, _req: Request, _resp: Response) -> None:
        """Reject OPTIONS, which Falcon would otherwise answer itself."""
        raise falcon.HTTPNotFound()
