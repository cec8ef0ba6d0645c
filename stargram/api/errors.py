"""Falcon error handlers for the webhook surface.

The relay answers in plain text with a fixed vocabulary: ``Not found`` for
anything other than ``POST /webhook`` and ``Server error`` for failures that
escape the resource. Diagnostics are logged, never returned to the caller.

Usage
-----
Register the handlers on the Falcon app::

    app.add_error_handler(falcon.HTTPNotFound, handle_not_found)
    app.add_error_handler(falcon.HTTPMethodNotAllowed, handle_not_found)
    app.add_error_handler(Exception, handle_unexpected_error)

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

import falcon

from stargram.logging import get_logger, log_exception

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

__all__ = ["NOT_FOUND_BODY", "handle_not_found", "handle_unexpected_error"]

logger = get_logger(__name__)

NOT_FOUND_BODY = "Not found"
SERVER_ERROR_BODY = "Server error"


def _plain_text(resp: Response, status: HTTPStatus, body: str) -> None:
    resp.status = status
    resp.content_type = falcon.MEDIA_TEXT
    resp.text = body


async def handle_not_found(
    _req: Request,
    resp: Response,
    _ex: falcon.HTTPError,
    _params: dict[str, typ.Any],
) -> None:
    """Map unknown routes and unsupported methods to ``404 Not found``.

    Parameters
    ----------
    _req
        Falcon request (unused).
    resp
        Falcon response whose status and body are set.
    _ex
        The routing error raised by Falcon (unused).
    _params
        URI template parameters (unused).

    """
    _plain_text(resp, HTTPStatus.NOT_FOUND, NOT_FOUND_BODY)


async def handle_unexpected_error(
    req: Request,
    resp: Response,
    ex: Exception,
    _params: dict[str, typ.Any],
) -> None:
    """Log an unhandled exception and answer ``500 Server error``."""
    log_exception(logger, f"Unhandled error for {req.method} {req.path}", ex)
    _plain_text(resp, HTTPStatus.INTERNAL_SERVER_ERROR, SERVER_ERROR_BODY)
