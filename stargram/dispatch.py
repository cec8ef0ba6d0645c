"""Webhook dispatch pipeline.

``WebhookDispatcher.dispatch`` runs one buffered delivery through the stages
verify, decode, filter, extract, render and send. Stages signal failure with
``StargramError`` subclasses; ``dispatch`` is the single boundary that maps
them (and anything unexpected) onto a ``DispatchOutcome``, so exactly one
response is produced per request.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ
from http import HTTPStatus

from stargram import signature
from stargram.errors import (
    AuthenticationError,
    MalformedPayloadError,
    TemplateMissingError,
)
from stargram.events import (
    IncomingEvent,
    decode_payload,
    extract_star_event,
    star_action,
)
from stargram.logging import (
    get_logger,
    log_error,
    log_exception,
    log_info,
    log_warning,
)
from stargram.telegram.models import DeliveryResult

if typ.TYPE_CHECKING:
    from stargram.config import RelayConfig
    from stargram.i18n import MessageRenderer
    from stargram.telegram import Notifier

logger = get_logger(__name__)

MESSAGE_KEY = "star.message"


class DispatchOutcome(enum.StrEnum):
    """Terminal states of a webhook delivery."""

    ACCEPTED = "accepted"
    IGNORED = "ignored"
    UNAUTHORIZED = "unauthorized"
    FAILED = "failed"

    @property
    def status(self) -> HTTPStatus:
        """Return the HTTP status for this outcome."""
        return _RESPONSES[self][0]

    @property
    def body(self) -> str:
        """Return the plain-text response body for this outcome."""
        return _RESPONSES[self][1]


_RESPONSES: dict[DispatchOutcome, tuple[HTTPStatus, str]] = {
    DispatchOutcome.ACCEPTED: (HTTPStatus.OK, "ok"),
    DispatchOutcome.IGNORED: (HTTPStatus.OK, "ok"),
    DispatchOutcome.UNAUTHORIZED: (HTTPStatus.UNAUTHORIZED, "Invalid signature"),
    DispatchOutcome.FAILED: (HTTPStatus.INTERNAL_SERVER_ERROR, "Server error"),
}


@dc.dataclass(frozen=True, slots=True)
class WebhookDelivery:
    """A buffered webhook request.

    Attributes
    ----------
    raw_body
        Complete request body.
    signature
        ``X-Hub-Signature-256`` header value, if present.
    event_type
        ``X-GitHub-Event`` header value, if present.

    """

    raw_body: bytes
    signature: str | None = None
    event_type: str | None = None


class WebhookDispatcher:
    """Turn verified star deliveries into Telegram notifications.

    Parameters
    ----------
    config
        Relay configuration; supplies the secret and the debug bypass.
    renderer
        Renderer bound to the configured locale chain.
    notifier
        Delivery backend.

    """

    def __init__(
        self,
        config: RelayConfig,
        renderer: MessageRenderer,
        notifier: Notifier,
    ) -> None:
        """Store collaborators for the pipeline."""
        self._secret = config.secret_bytes
        self._verify_signatures = not config.debug
        self._renderer = renderer
        self._notifier = notifier

    async def dispatch(self, delivery: WebhookDelivery) -> DispatchOutcome:
        """Process one delivery and return its terminal outcome.

        Never raises; every failure is logged and mapped to an outcome.
        """
        try:
            return await self._run(delivery)
        except AuthenticationError as exc:
            log_warning(logger, "Rejected webhook delivery: %s", exc)
            return DispatchOutcome.UNAUTHORIZED
        except MalformedPayloadError as exc:
            log_error(logger, "Malformed webhook payload: %s", exc)
            return DispatchOutcome.FAILED
        except TemplateMissingError as exc:
            log_error(
                logger,
                "Template %r missing from locales %s",
                exc.key,
                ", ".join(exc.locales),
            )
            return DispatchOutcome.FAILED
        except Exception as exc:  # noqa: BLE001 - boundary owes exactly one response
            log_exception(logger, "Unexpected error while dispatching webhook", exc)
            return DispatchOutcome.FAILED

    async def _run(self, delivery: WebhookDelivery) -> DispatchOutcome:
        self._authenticate(delivery)

        payload = decode_payload(delivery.raw_body)
        action = star_action(delivery.event_type, payload)
        log_info(
            logger,
            "Webhook event=%s action=%s",
            delivery.event_type,
            payload.get("action"),
        )
        if action is None:
            return DispatchOutcome.IGNORED

        # delivery.event_type is "star" once star_action accepted it
        event = extract_star_event(
            typ.cast("str", delivery.event_type), action, payload
        )
        text = self.render(event)
        result = await self._send(text)
        self._log_delivery(event, result)
        return DispatchOutcome.ACCEPTED

    def _authenticate(self, delivery: WebhookDelivery) -> None:
        """Raise ``AuthenticationError`` unless the signature gate passes."""
        if not self._verify_signatures:
            return
        if not delivery.signature:
            raise AuthenticationError.missing_signature()
        if not signature.verify(delivery.raw_body, delivery.signature, self._secret):
            raise AuthenticationError.invalid_signature()

    def render(self, event: IncomingEvent) -> str:
        """Render the notification text for ``event``.

        Raises
        ------
        TemplateMissingError
            If a required template key is not defined.

        """
        emoji = self._renderer.render(f"star.emoji.{event.action}")
        prefix = self._renderer.render(f"star.prefix.{event.action}")
        return self._renderer.render(
            MESSAGE_KEY,
            {
                "emoji": emoji,
                "prefix": prefix,
                "repo": event.repo_slug,
                "starrer": event.starrer_login,
                "count": event.star_count,
            },
        )

    async def _send(self, text: str) -> DeliveryResult:
        """Send ``text``, folding notifier exceptions into a failed result."""
        try:
            return await self._notifier.send(text)
        except Exception as exc:  # noqa: BLE001 - delivery never changes the response
            log_exception(logger, "Notifier raised while sending notification", exc)
            return DeliveryResult(success=False, detail=type(exc).__name__)

    def _log_delivery(self, event: IncomingEvent, result: DeliveryResult) -> None:
        if result.success:
            return
        log_error(
            logger,
            "Star notification for %s by %s was not delivered (status=%s)",
            event.repo_slug,
            event.starrer_login,
            result.status_code,
        )


__all__ = ["MESSAGE_KEY", "DispatchOutcome", "WebhookDelivery", "WebhookDispatcher"]
