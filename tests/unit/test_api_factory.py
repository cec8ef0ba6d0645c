"""Unit tests for dependency assembly."""

from __future__ import annotations

import dataclasses
import typing as typ

import httpx
import pytest

from stargram.api.factory import (
    build_dependencies,
    build_renderer,
    resolve_locale,
)
from stargram.errors import ConfigError
from stargram.i18n import LocaleCatalog
from stargram.telegram import TelegramNotifier

if typ.TYPE_CHECKING:
    from stargram.config import RelayConfig


class _FakeLogger:
    """Collects log calls for assertions."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str:
        self.calls.append((level, message))
        return message


@pytest.fixture
def fake_logger(monkeypatch: pytest.MonkeyPatch) -> _FakeLogger:
    """Replace the factory's logger with a collecting fake."""
    logger = _FakeLogger()
    monkeypatch.setattr("stargram.api.factory.logger", logger)
    return logger


@pytest.mark.parametrize(
    ("language", "expected"),
    [
        ("pt", "pt"),
        ("pt-BR", "pt"),
        ("pt_BR", "pt"),
        ("pt_BR.UTF-8", "pt"),
        ("PT-br", "pt"),
        ("en_US:en", "en"),
        ("tlh:pt_PT", "pt"),
        ("de", None),
        ("", None),
    ],
)
def test_resolve_locale(language: str, expected: str | None) -> None:
    """Tags match as written, then by base language, across preference lists."""
    assert resolve_locale(language, frozenset({"pt", "en"})) == expected


class TestBuildRenderer:
    """Tests for build_renderer."""

    def test_uses_configured_chain(
        self, relay_config: RelayConfig, bundled_catalog: LocaleCatalog
    ) -> None:
        """The renderer consults the active locale, then the fallback."""
        renderer = build_renderer(relay_config, bundled_catalog)
        assert renderer.locales == ("pt", "en")

    def test_regional_tag_renders_base_language(
        self, relay_config: RelayConfig, bundled_catalog: LocaleCatalog
    ) -> None:
        """A regional tag such as pt-BR renders the Portuguese templates."""
        config = dataclasses.replace(relay_config, language="pt-BR")

        renderer = build_renderer(config, bundled_catalog)

        assert renderer.locales == ("pt", "en")
        assert renderer.render("star.prefix.created") == "Nova estrela"

    def test_unknown_language_renders_fallback(
        self,
        relay_config: RelayConfig,
        bundled_catalog: LocaleCatalog,
        fake_logger: _FakeLogger,
    ) -> None:
        """A language without templates falls back with a warning."""
        config = dataclasses.replace(relay_config, language="de")

        renderer = build_renderer(config, bundled_catalog)

        assert renderer.locales == ("en",)
        assert renderer.render("star.prefix.created") == "New star"
        assert fake_logger.calls == [
            (
                "WARNING",
                "No templates for LANGUAGE 'de'; rendering in fallback locale en",
            )
        ]

    def test_rejects_unknown_fallback(
        self, relay_config: RelayConfig, bundled_catalog: LocaleCatalog
    ) -> None:
        """A fallback locale without a template table is a configuration error."""
        config = dataclasses.replace(relay_config, fallback_language="tlh")
        with pytest.raises(ConfigError, match="tlh"):
            build_renderer(config, bundled_catalog)


class TestBuildDependencies:
    """Tests for build_dependencies."""

    @pytest.mark.asyncio
    async def test_assembles_notifier_and_renderer(
        self, relay_config: RelayConfig
    ) -> None:
        """Dependencies use the bundled catalog and a Telegram notifier."""
        client = httpx.AsyncClient()
        deps = build_dependencies(relay_config, http_client=client)

        assert deps.config is relay_config
        assert isinstance(deps.notifier, TelegramNotifier)
        assert deps.renderer.render("star.prefix.deleted") == "Estrela removida"
        await client.aclose()

    def test_accepts_custom_catalog(self, relay_config: RelayConfig) -> None:
        """A supplied catalog replaces the bundled tables."""
        catalog = LocaleCatalog.from_tables(
            {"pt": {"star": {"message": "custom"}}, "en": {}}
        )
        deps = build_dependencies(
            relay_config,
            catalog=catalog,
            http_client=httpx.AsyncClient(),
        )
        assert deps.renderer.render("star.message") == "custom"
