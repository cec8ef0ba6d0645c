"""Telegram Bot API implementation of the Notifier protocol."""

from __future__ import annotations

import typing as typ

import httpx

from stargram.errors import DeliveryError
from stargram.logging import get_logger, log_error, log_info
from stargram.telegram.models import DeliveryResult

if typ.TYPE_CHECKING:
    from stargram.config import RelayConfig

logger = get_logger(__name__)

PARSE_MODE = "markdown"


class TelegramNotifier:
    """Send messages through the Telegram ``sendMessage`` endpoint.

    Parameters
    ----------
    config
        Relay configuration supplying the bot token, chat id, API base and
        timeout.
    http_client
        Optional ``httpx.AsyncClient`` for testing. If not provided, the
        instance creates and owns its own client.

    Examples
    --------
    >>> import asyncio
    >>> notifier = TelegramNotifier(config)
    >>> # result = asyncio.run(notifier.send("hello"))
    >>> asyncio.run(notifier.aclose())

    """

    def __init__(
        self,
        config: RelayConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the notifier with configuration."""
        self._url = config.send_message_url
        self._chat_id = config.telegram_chat_id
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=config.telegram_timeout_s,
            headers={"Content-Type": "application/json"},
        )

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def send(self, text: str) -> DeliveryResult:
        """Deliver ``text`` to the configured chat.

        A single request is made. Failures are logged and returned as an
        unsuccessful ``DeliveryResult``; this method does not raise for
        API or transport errors.

        Parameters
        ----------
        text
            Rendered message in Telegram markdown.

        Returns
        -------
        DeliveryResult
            Classified delivery outcome.

        """
        try:
            response = await self._send_request(self._build_payload(text))
            self._check_response(response)
        except DeliveryError as exc:
            log_error(
                logger,
                "Telegram delivery failed: %s (status=%s detail=%s)",
                exc,
                exc.status_code,
                exc.detail,
            )
            return DeliveryResult.from_error(exc)

        log_info(logger, "Telegram message sent: %s", text)
        return DeliveryResult.delivered(response.status_code)

    def _build_payload(self, text: str) -> dict[str, object]:
        return {
            "chat_id": self._chat_id,
            "text": text,
            "parse_mode": PARSE_MODE,
            "disable_web_page_preview": True,
        }

    async def _send_request(self, payload: dict[str, object]) -> httpx.Response:
        """POST ``payload`` to ``sendMessage``.

        Raises
        ------
        DeliveryError
            If the request times out or fails at the transport level.

        """
        try:
            return await self._client.post(self._url, json=payload)
        except httpx.TimeoutException as exc:
            raise DeliveryError.timeout() from exc
        except httpx.RequestError as exc:
            # The URL embeds the bot token; report the failure class only.
            raise DeliveryError.network_error(type(exc).__name__) from exc

    def _check_response(self, response: httpx.Response) -> None:
        """Raise ``DeliveryError`` for any non-2xx response."""
        if not response.is_success:
            raise DeliveryError.http_error(response.status_code, response.text)


__all__ = ["PARSE_MODE", "TelegramNotifier"]
