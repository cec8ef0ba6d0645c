"""Exception taxonomy for the star relay.

Every error raised while handling a webhook derives from ``StargramError``
so the dispatcher has a single catch point. Instances are built through
classmethod factories which keep message wording in one place.

Messages may reach operator logs but are never written to HTTP responses.
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

# Response body preview length for delivery errors
_DETAIL_PREVIEW_LIMIT = 200


def _preview(text: str) -> str:
    if len(text) > _DETAIL_PREVIEW_LIMIT:
        return text[:_DETAIL_PREVIEW_LIMIT] + "..."
    return text


class StargramError(Exception):
    """Base exception for all star relay errors."""


class AuthenticationError(StargramError):
    """Raised when a webhook delivery fails signature verification."""

    @classmethod
    def missing_signature(cls) -> AuthenticationError:
        """Return an error for a request without a signature header."""
        return cls("Webhook request carries no X-Hub-Signature-256 header")

    @classmethod
    def invalid_signature(cls) -> AuthenticationError:
        """Return an error for a signature that does not match the body."""
        return cls("Webhook signature does not match request body")


class MalformedPayloadError(StargramError):
    """Raised when a webhook body cannot be decoded into a star event."""

    @classmethod
    def invalid_json(cls, detail: str) -> MalformedPayloadError:
        """Return an error for a body that is not valid JSON.

        Parameters
        ----------
        detail
            Decoder message describing the failure.

        Returns
        -------
        MalformedPayloadError
            Error carrying the decoder message.

        """
        return cls(f"Webhook body is not valid JSON: {detail}")

    @classmethod
    def not_an_object(cls, kind: str) -> MalformedPayloadError:
        """Return an error for a JSON document that is not an object."""
        return cls(f"Webhook body must be a JSON object, got {kind}")

    @classmethod
    def invalid_fields(cls, detail: str) -> MalformedPayloadError:
        """Return an error for missing or mistyped payload fields."""
        return cls(f"Star payload is missing expected fields: {detail}")


class TemplateMissingError(StargramError):
    """Raised when no locale in the fallback chain defines a template key.

    Attributes
    ----------
    key
        Dotted template key that could not be resolved.
    locales
        Locales consulted, in lookup order.

    """

    def __init__(self, key: str, locales: cabc.Sequence[str]) -> None:
        """Initialise with the unresolved key and the locales consulted."""
        self.key = key
        self.locales = tuple(locales)
        tried = ", ".join(self.locales)
        super().__init__(f"Template {key!r} is not defined in locales: {tried}")


class DeliveryError(StargramError):
    """Raised when the Telegram Bot API does not accept a message.

    Attributes
    ----------
    status_code
        HTTP status code from the API response, if one was received.
    detail
        Response body text or transport failure description.

    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        """Initialise with a message and optional response context."""
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)

    @classmethod
    def http_error(cls, status_code: int, body: str) -> DeliveryError:
        """Return an error for a non-success HTTP response.

        Parameters
        ----------
        status_code
            HTTP status code returned by Telegram.
        body
            Raw response body text.

        Returns
        -------
        DeliveryError
            Error with status code and truncated body preview.

        """
        return cls(
            f"Telegram API HTTP error {status_code}",
            status_code=status_code,
            detail=_preview(body),
        )

    @classmethod
    def timeout(cls) -> DeliveryError:
        """Return an error for a request that exceeded its timeout."""
        return cls("Telegram API request timed out", detail="timeout")

    @classmethod
    def network_error(cls, detail: str) -> DeliveryError:
        """Return an error for DNS, connection or TLS failures."""
        return cls(f"Telegram API network error: {detail}", detail=detail)


class ConfigError(StargramError):
    """Raised when relay configuration is missing or invalid."""

    @classmethod
    def missing(cls, names: cabc.Iterable[str]) -> ConfigError:
        """Return an error listing required variables that are unset.

        Parameters
        ----------
        names
            Environment variable names that are missing or blank.

        Returns
        -------
        ConfigError
            Error naming every missing variable.

        """
        listed = ", ".join(names)
        return cls(f"Missing required environment variables: {listed}")

    @classmethod
    def invalid_value(cls, name: str, value: str, constraint: str) -> ConfigError:
        """Return an error for a variable whose value fails validation."""
        return cls(f"Invalid {name} value {value!r}. {constraint}")

    @classmethod
    def unknown_locale(
        cls, locale: str, available: cabc.Iterable[str]
    ) -> ConfigError:
        """Return an error for a locale with no bundled template table."""
        choices = ", ".join(f"'{name}'" for name in sorted(available))
        return cls(f"Unknown locale '{locale}'. Available locales are: {choices}")

    @classmethod
    def invalid_locale_file(cls, name: str, detail: str) -> ConfigError:
        """Return an error for a locale file that cannot be loaded."""
        return cls(f"Locale file '{name}' could not be loaded: {detail}")


__all__ = [
    "AuthenticationError",
    "ConfigError",
    "DeliveryError",
    "MalformedPayloadError",
    "StargramError",
    "TemplateMissingError",
]
