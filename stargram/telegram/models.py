"""Outcome types for Telegram delivery."""

from __future__ import annotations

import dataclasses

from stargram.errors import DeliveryError


@dataclasses.dataclass(frozen=True, slots=True)
class DeliveryResult:
    """Classified outcome of one ``sendMessage`` call.

    Attributes
    ----------
    success
        ``True`` when Telegram accepted the message.
    status_code
        HTTP status of the response; ``None`` when no response arrived.
    detail
        Response body or failure description for unsuccessful deliveries.

    """

    success: bool
    status_code: int | None = None
    detail: str | None = None

    @classmethod
    def delivered(cls, status_code: int) -> DeliveryResult:
        """Return a successful result."""
        return cls(success=True, status_code=status_code)

    @classmethod
    def from_error(cls, error: DeliveryError) -> DeliveryResult:
        """Return a failed result describing ``error``."""
        return cls(
            success=False,
            status_code=error.status_code,
            detail=error.detail or str(error),
        )
