"""Relay configuration loaded once at startup.

``RelayConfig`` is immutable and is passed explicitly into the dispatcher and
notifier, so request handling never consults the process environment.
"""

from __future__ import annotations

import dataclasses
import os

from stargram.errors import ConfigError

# Default configuration values - single source of truth
_DEFAULT_LANGUAGE = "pt"
_DEFAULT_FALLBACK_LANGUAGE = "en"
_DEFAULT_HOST = "0.0.0.0"  # noqa: S104 - bind all interfaces for container
_DEFAULT_PORT = 3000
_DEFAULT_LOG_LEVEL = "INFO"
_DEFAULT_TELEGRAM_API_BASE = "https://api.telegram.org"
_DEFAULT_TELEGRAM_TIMEOUT_S = 5.0

# TCP port number range limits
_MIN_PORT = 1
_MAX_PORT = 65535

_REQUIRED_VARIABLES = ("WEBHOOK_SECRET", "TELEGRAM_BOT_TOKEN", "TELEGRAM_CHAT_ID")
_TRUTHY_VALUES = frozenset({"1", "true", "yes", "on"})


def parse_flag(raw: str | None) -> bool:
    """Return ``True`` when ``raw`` spells an enabled flag.

    Accepts ``1``, ``true``, ``yes`` and ``on`` in any case. Everything else,
    including ``0`` and the empty string, is off.
    """
    if raw is None:
        return False
    return raw.strip().lower() in _TRUTHY_VALUES


def parse_port(raw: str) -> int:
    """Parse and validate a TCP port number.

    Raises
    ------
    ConfigError
        If ``raw`` is not an integer in the range 1-65535.

    """
    constraint = f"Must be an integer between {_MIN_PORT} and {_MAX_PORT}"
    try:
        port = int(raw)
    except ValueError as exc:
        raise ConfigError.invalid_value("PORT", raw, constraint) from exc
    if not _MIN_PORT <= port <= _MAX_PORT:
        raise ConfigError.invalid_value("PORT", raw, constraint)
    return port


def _parse_timeout(raw: str) -> float:
    constraint = "Must be a positive number of seconds"
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigError.invalid_value("TELEGRAM_TIMEOUT_S", raw, constraint) from exc
    if timeout <= 0:
        raise ConfigError.invalid_value("TELEGRAM_TIMEOUT_S", raw, constraint)
    return timeout


def _env_or_default(name: str, default: str) -> str:
    """Return the stripped variable, or ``default`` when unset or blank."""
    value = os.environ.get(name, "").strip()
    return value or default


@dataclasses.dataclass(frozen=True, slots=True)
class RelayConfig:
    """Immutable settings for the webhook relay.

    Attributes
    ----------
    webhook_secret
        Shared secret used to verify ``X-Hub-Signature-256``.
    telegram_bot_token
        Bot API token authorising ``sendMessage`` calls.
    telegram_chat_id
        Identifier of the chat that receives notifications.
    language
        Active locale for rendered messages.
    fallback_language
        Locale consulted when the active one lacks a template.
    debug
        Disables signature verification. Never enable in production.
    host
        Bind address for the HTTP server.
    port
        Listen port for the HTTP server.
    log_level
        Raw log level passed to femtologging.
    telegram_api_base
        Base URL of the Telegram Bot API.
    telegram_timeout_s
        Timeout applied to each outbound ``sendMessage`` call.

    """

    webhook_secret: str = dataclasses.field(repr=False)
    telegram_bot_token: str = dataclasses.field(repr=False)
    telegram_chat_id: str
    language: str = _DEFAULT_LANGUAGE
    fallback_language: str = _DEFAULT_FALLBACK_LANGUAGE
    debug: bool = False
    host: str = _DEFAULT_HOST
    port: int = _DEFAULT_PORT
    log_level: str = _DEFAULT_LOG_LEVEL
    telegram_api_base: str = _DEFAULT_TELEGRAM_API_BASE
    telegram_timeout_s: float = _DEFAULT_TELEGRAM_TIMEOUT_S

    @property
    def secret_bytes(self) -> bytes:
        """Return the webhook secret encoded for HMAC computation."""
        return self.webhook_secret.encode("utf-8")

    @property
    def send_message_url(self) -> str:
        """Return the ``sendMessage`` endpoint for the configured bot."""
        base = self.telegram_api_base.rstrip("/")
        return f"{base}/bot{self.telegram_bot_token}/sendMessage"

    @classmethod
    def from_env(cls) -> RelayConfig:
        """Build configuration from environment variables.

        Reads ``WEBHOOK_SECRET``, ``TELEGRAM_BOT_TOKEN`` and
        ``TELEGRAM_CHAT_ID`` (all required), plus the optional ``LANGUAGE``,
        ``FALLBACK_LANGUAGE``, ``DEBUG``, ``HOST``, ``PORT``, ``LOG_LEVEL``,
        ``TELEGRAM_API_BASE`` and ``TELEGRAM_TIMEOUT_S``.

        Returns
        -------
        RelayConfig
            Configuration populated from the environment.

        Raises
        ------
        ConfigError
            If a required variable is missing or blank, or an optional value
            fails validation.

        """
        required = {
            name: os.environ.get(name, "").strip() for name in _REQUIRED_VARIABLES
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise ConfigError.missing(missing)

        return cls(
            webhook_secret=required["WEBHOOK_SECRET"],
            telegram_bot_token=required["TELEGRAM_BOT_TOKEN"],
            telegram_chat_id=required["TELEGRAM_CHAT_ID"],
            language=_env_or_default("LANGUAGE", _DEFAULT_LANGUAGE),
            fallback_language=_env_or_default(
                "FALLBACK_LANGUAGE", _DEFAULT_FALLBACK_LANGUAGE
            ),
            debug=parse_flag(os.environ.get("DEBUG")),
            host=_env_or_default("HOST", _DEFAULT_HOST),
            port=parse_port(_env_or_default("PORT", str(_DEFAULT_PORT))),
            log_level=_env_or_default("LOG_LEVEL", _DEFAULT_LOG_LEVEL),
            telegram_api_base=_env_or_default(
                "TELEGRAM_API_BASE", _DEFAULT_TELEGRAM_API_BASE
            ),
            telegram_timeout_s=_parse_timeout(
                _env_or_default("TELEGRAM_TIMEOUT_S", str(_DEFAULT_TELEGRAM_TIMEOUT_S))
            ),
        )


__all__ = ["RelayConfig", "parse_flag", "parse_port"]
