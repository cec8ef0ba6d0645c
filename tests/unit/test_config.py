"""Unit tests for relay configuration."""

from __future__ import annotations

import dataclasses
import os
from unittest import mock

import pytest

from stargram.config import RelayConfig, parse_flag, parse_port
from stargram.errors import ConfigError

REQUIRED_ENV = {
    "WEBHOOK_SECRET": "s3cret",
    "TELEGRAM_BOT_TOKEN": "123:abc",
    "TELEGRAM_CHAT_ID": "-10042",
}


class TestRelayConfigFromEnv:
    """Tests for configuration loading from environment variables."""

    def test_uses_defaults(self) -> None:
        """Only required variables set yields documented defaults."""
        with mock.patch.dict(os.environ, REQUIRED_ENV, clear=True):
            config = RelayConfig.from_env()

        assert config.webhook_secret == "s3cret"
        assert config.telegram_bot_token == "123:abc"
        assert config.telegram_chat_id == "-10042"
        assert config.language == "pt", "Expected default locale pt"
        assert config.fallback_language == "en", "Expected fallback locale en"
        assert config.debug is False
        assert config.host == "0.0.0.0"  # noqa: S104
        assert config.port == 3000, "Expected default port 3000"
        assert config.log_level == "INFO"
        assert config.telegram_api_base == "https://api.telegram.org"
        assert config.telegram_timeout_s == 5.0

    @pytest.mark.parametrize("missing", sorted(REQUIRED_ENV))
    def test_requires_credentials(self, missing: str) -> None:
        """Each required variable must be present."""
        env = {k: v for k, v in REQUIRED_ENV.items() if k != missing}
        with (
            mock.patch.dict(os.environ, env, clear=True),
            pytest.raises(ConfigError) as exc_info,
        ):
            RelayConfig.from_env()
        assert missing in str(exc_info.value)

    def test_blank_credentials_count_as_missing(self) -> None:
        """Whitespace-only credentials are rejected and all are listed."""
        env = dict.fromkeys(REQUIRED_ENV, "  ")
        with (
            mock.patch.dict(os.environ, env, clear=True),
            pytest.raises(ConfigError) as exc_info,
        ):
            RelayConfig.from_env()
        for name in REQUIRED_ENV:
            assert name in str(exc_info.value)

    @pytest.mark.parametrize(
        ("env_var", "attr_name", "value", "expected"),
        [
            ("LANGUAGE", "language", "en", "en"),
            ("FALLBACK_LANGUAGE", "fallback_language", "pt", "pt"),
            ("DEBUG", "debug", "1", True),
            ("HOST", "host", "127.0.0.1", "127.0.0.1"),
            ("PORT", "port", "8080", 8080),
            ("LOG_LEVEL", "log_level", "debug", "debug"),
            ("TELEGRAM_API_BASE", "telegram_api_base", "http://tg", "http://tg"),
            ("TELEGRAM_TIMEOUT_S", "telegram_timeout_s", "2.5", 2.5),
        ],
    )
    def test_reads_optional_values(
        self, env_var: str, attr_name: str, value: str, expected: object
    ) -> None:
        """Optional variables override defaults."""
        env = {**REQUIRED_ENV, env_var: value}
        with mock.patch.dict(os.environ, env, clear=True):
            config = RelayConfig.from_env()
        assert getattr(config, attr_name) == expected

    def test_empty_language_uses_default(self) -> None:
        """An empty LANGUAGE falls back to pt."""
        env = {**REQUIRED_ENV, "LANGUAGE": ""}
        with mock.patch.dict(os.environ, env, clear=True):
            assert RelayConfig.from_env().language == "pt"

    @pytest.mark.parametrize(
        ("env_var", "value"),
        [
            ("PORT", "http"),
            ("PORT", "0"),
            ("PORT", "65536"),
            ("TELEGRAM_TIMEOUT_S", "soon"),
            ("TELEGRAM_TIMEOUT_S", "0"),
        ],
    )
    def test_rejects_invalid_values(self, env_var: str, value: str) -> None:
        """Invalid optional values raise ConfigError naming the variable."""
        env = {**REQUIRED_ENV, env_var: value}
        with (
            mock.patch.dict(os.environ, env, clear=True),
            pytest.raises(ConfigError, match=env_var),
        ):
            RelayConfig.from_env()


class TestRelayConfig:
    """Tests for derived values and immutability."""

    def test_is_frozen(self, relay_config: RelayConfig) -> None:
        """Configuration cannot be mutated after construction."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            relay_config.debug = True  # type: ignore[misc]

    def test_repr_hides_secrets(self, relay_config: RelayConfig) -> None:
        """Secret and token never appear in the repr."""
        text = repr(relay_config)
        assert relay_config.webhook_secret not in text
        assert relay_config.telegram_bot_token not in text

    def test_send_message_url(self, relay_config: RelayConfig) -> None:
        """The endpoint embeds the bot token under the API base."""
        config = dataclasses.replace(relay_config, telegram_api_base="https://tg/")
        assert config.send_message_url == "https://tg/bot123456:test-token/sendMessage"

    def test_secret_bytes(self, relay_config: RelayConfig) -> None:
        """The secret is UTF-8 encoded for HMAC."""
        assert relay_config.secret_bytes == relay_config.webhook_secret.encode()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1", True),
        ("true", True),
        ("TRUE", True),
        (" yes ", True),
        ("on", True),
        ("0", False),
        ("false", False),
        ("", False),
        (None, False),
        ("anything", False),
    ],
)
def test_parse_flag(raw: str | None, *, expected: bool) -> None:
    """Only explicit truthy spellings enable a flag."""
    assert parse_flag(raw) is expected


@pytest.mark.parametrize(
    ("raw", "expected"), [("1", 1), ("3000", 3000), ("65535", 65535)]
)
def test_parse_port_accepts_range(raw: str, expected: int) -> None:
    """Ports within 1-65535 are accepted."""
    assert parse_port(raw) == expected
