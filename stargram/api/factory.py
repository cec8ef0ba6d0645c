"""Build application dependencies from relay configuration.

Usage
-----
Assemble dependencies for the API layer::

    from stargram.api.factory import build_dependencies

    deps = build_dependencies(RelayConfig.from_env())

"""

from __future__ import annotations

import re
import typing as typ

from stargram.api.app import AppDependencies
from stargram.errors import ConfigError
from stargram.i18n import MessageRenderer, load_catalog
from stargram.logging import get_logger, log_info, log_warning
from stargram.telegram import TelegramNotifier

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    import httpx

    from stargram.config import RelayConfig
    from stargram.i18n import LocaleCatalog

__all__ = ["build_dependencies", "build_renderer", "resolve_locale"]

logger = get_logger(__name__)

# Region, codeset and modifier separators in locale tags
_TAG_SEPARATORS = re.compile(r"[-_.@]")


def resolve_locale(language: str, available: cabc.Container[str]) -> str | None:
    """Return the first available locale matching ``language``.

    ``language`` may be a BCP 47 tag (``pt-BR``), a POSIX locale
    (``pt_BR.UTF-8``) or a GNU ``LANGUAGE`` preference list (``en_US:en``).
    Each entry is tried as written, then by its base language.

    Examples
    --------
    >>> resolve_locale("pt-BR", {"pt", "en"})
    'pt'
    >>> resolve_locale("de", {"pt", "en"}) is None
    True

    """
    for raw_entry in language.split(":"):
        entry = raw_entry.strip()
        if not entry:
            continue
        base = _TAG_SEPARATORS.split(entry, maxsplit=1)[0].lower()
        for candidate in (entry, base):
            if candidate in available:
                return candidate
    return None


def build_renderer(config: RelayConfig, catalog: LocaleCatalog) -> MessageRenderer:
    """Return a renderer for the configured locale chain.

    The active locale is resolved with :func:`resolve_locale`. When nothing
    matches, a warning is logged and only the fallback locale is used.

    Raises
    ------
    ConfigError
        If the fallback locale has no template table.

    """
    fallback = config.fallback_language
    if fallback not in catalog.locales:
        raise ConfigError.unknown_locale(fallback, catalog.locales)

    locale = resolve_locale(config.language, catalog.locales)
    if locale is None:
        log_warning(
            logger,
            "No templates for LANGUAGE %r; rendering in fallback locale %s",
            config.language,
            fallback,
        )
        locale = fallback
    elif locale != config.language:
        log_info(logger, "LANGUAGE %r resolved to locale %s", config.language, locale)
    return MessageRenderer(catalog, locale, fallback)


def build_dependencies(
    config: RelayConfig,
    *,
    catalog: LocaleCatalog | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> AppDependencies:
    """Assemble renderer and notifier for ``config``.

    Parameters
    ----------
    config
        Relay configuration.
    catalog
        Locale catalog; defaults to the bundled locale tables.
    http_client
        Optional client handed to the notifier, mainly for tests.

    Returns
    -------
    AppDependencies
        Dependencies ready for :func:`stargram.api.app.create_app`.

    Raises
    ------
    ConfigError
        If the locale tables cannot be loaded or lack the fallback locale.

    """
    renderer = build_renderer(config, catalog or load_catalog())
    notifier = TelegramNotifier(config, http_client=http_client)
    return AppDependencies(config=config, renderer=renderer, notifier=notifier)
