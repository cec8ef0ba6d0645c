"""Application factory for the stargram Falcon ASGI application.

Usage
-----
Build the app from explicit dependencies::

    from stargram.api.app import AppDependencies, create_app

    deps = AppDependencies(config=config, renderer=renderer, notifier=notifier)
    app = create_app(deps)

"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import falcon
import falcon.asgi

from stargram.api.errors import handle_not_found, handle_unexpected_error
from stargram.api.middleware import NotifierLifespan
from stargram.api.webhook import WEBHOOK_ROUTE, WebhookResource
from stargram.dispatch import WebhookDispatcher

if typ.TYPE_CHECKING:
    from stargram.config import RelayConfig
    from stargram.i18n import MessageRenderer
    from stargram.telegram import Notifier

__all__ = ["AppDependencies", "create_app"]


@dc.dataclass(frozen=True, slots=True)
class AppDependencies:
    """Collaborators for the Falcon ASGI application.

    Attributes
    ----------
    config
        Immutable relay configuration.
    renderer
        Renderer bound to the configured locale chain.
    notifier
        Delivery backend for rendered messages.

    """

    config: RelayConfig
    renderer: MessageRenderer
    notifier: Notifier


def create_app(dependencies: AppDependencies) -> falcon.asgi.App:
    """Create and configure the Falcon ASGI application.

    Registers ``POST /webhook`` and maps every other route or method to
    ``404 Not found``. Errors escaping the resource become
    ``500 Server error``.

    Parameters
    ----------
    dependencies
        Application collaborators.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application.

    """
    app = falcon.asgi.App(middleware=[NotifierLifespan(dependencies.notifier)])  # type: ignore[no-matching-overload]  # Falcon stubs

    dispatcher = WebhookDispatcher(
        dependencies.config,
        dependencies.renderer,
        dependencies.notifier,
    )
    app.add_route(WEBHOOK_ROUTE, WebhookResource(dispatcher))

    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(falcon.HTTPNotFound, handle_not_found)
    app.add_error_handler(falcon.HTTPMethodNotAllowed, handle_not_found)

    return app
