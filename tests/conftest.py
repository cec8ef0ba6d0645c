"""Shared fixtures for stargram tests."""

from __future__ import annotations

import dataclasses

import pytest

from stargram.config import RelayConfig
from stargram.i18n import LocaleCatalog, MessageRenderer, load_catalog
from tests.helpers.notifiers import RecordingNotifier

WEBHOOK_SECRET = "It's a Secret to Everybody"


@pytest.fixture
def relay_config() -> RelayConfig:
    """Provide a verifying configuration for the Portuguese locale."""
    return RelayConfig(
        webhook_secret=WEBHOOK_SECRET,
        telegram_bot_token="123456:test-token",
        telegram_chat_id="-1001234567890",
        telegram_api_base="https://telegram.test",
    )


@pytest.fixture
def debug_config(relay_config: RelayConfig) -> RelayConfig:
    """Provide a configuration with signature verification disabled."""
    return dataclasses.replace(relay_config, debug=True)


@pytest.fixture
def secret(relay_config: RelayConfig) -> bytes:
    """Return the webhook secret as bytes."""
    return relay_config.secret_bytes


@pytest.fixture(scope="session")
def bundled_catalog() -> LocaleCatalog:
    """Load the locale tables shipped with the package."""
    return load_catalog()


@pytest.fixture
def renderer(bundled_catalog: LocaleCatalog) -> MessageRenderer:
    """Provide a renderer for ``pt`` with ``en`` fallback."""
    return MessageRenderer(bundled_catalog, "pt", "en")


@pytest.fixture
def notifier() -> RecordingNotifier:
    """Provide a notifier that records messages."""
    return RecordingNotifier()
