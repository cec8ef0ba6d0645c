"""Locale template tables and key resolution.

Each locale is a nested JSON object. Leaves are template strings and are
addressed by dotted keys, so ``{"star": {"emoji": {"created": "..."}}}``
defines ``star.emoji.created``. Tables are flattened once at load time.
"""

from __future__ import annotations

import dataclasses
import typing as typ
from importlib import resources
from pathlib import Path

import msgspec

from stargram.errors import ConfigError, TemplateMissingError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

_LOCALE_SUFFIX = ".json"
_KEY_SEPARATOR = "."


def _flatten(
    table: cabc.Mapping[str, object],
    prefix: str = "",
) -> cabc.Iterator[tuple[str, str]]:
    """Yield ``(dotted_key, template)`` pairs for every string leaf."""
    for name, value in table.items():
        key = f"{prefix}{_KEY_SEPARATOR}{name}" if prefix else name
        if isinstance(value, str):
            yield key, value
        elif isinstance(value, dict):
            yield from _flatten(typ.cast("dict[str, object]", value), key)


@dataclasses.dataclass(frozen=True, slots=True)
class LocaleCatalog:
    """Flattened template tables keyed by locale name.

    Attributes
    ----------
    tables
        Mapping of locale name to ``{dotted_key: template}``.

    """

    tables: cabc.Mapping[str, cabc.Mapping[str, str]]

    @property
    def locales(self) -> frozenset[str]:
        """Return the locale names this catalog defines."""
        return frozenset(self.tables)

    @classmethod
    def from_tables(
        cls,
        tables: cabc.Mapping[str, cabc.Mapping[str, object]],
    ) -> LocaleCatalog:
        """Build a catalog from nested per-locale tables."""
        return cls(
            tables={locale: dict(_flatten(table)) for locale, table in tables.items()}
        )

    def lookup(self, locale: str, key: str) -> str | None:
        """Return the template for ``key`` in one locale, or ``None``."""
        table = self.tables.get(locale)
        if table is None:
            return None
        return table.get(key)

    def resolve(self, key: str, locales: cabc.Sequence[str]) -> str:
        """Resolve ``key`` by trying each locale in order.

        Parameters
        ----------
        key
            Dotted template key, for example ``star.message``.
        locales
            Lookup chain, active locale first.

        Returns
        -------
        str
            The first template found along the chain.

        Raises
        ------
        TemplateMissingError
            If no locale in the chain defines ``key``.

        """
        for locale in locales:
            template = self.lookup(locale, key)
            if template is not None:
                return template
        raise TemplateMissingError(key, locales)


def _decode_table(name: str, content: bytes) -> dict[str, object]:
    try:
        return msgspec.json.decode(content, type=dict[str, object])
    except msgspec.DecodeError as exc:
        raise ConfigError.invalid_locale_file(name, str(exc)) from exc


def load_catalog(directory: Path | str | None = None) -> LocaleCatalog:
    """Load every ``<locale>.json`` file into a catalog.

    Parameters
    ----------
    directory
        Directory holding locale files. Defaults to the tables bundled in
        ``stargram/i18n/locales``.

    Returns
    -------
    LocaleCatalog
        Catalog keyed by file stem.

    Raises
    ------
    ConfigError
        If a locale file is unreadable or not a JSON object.

    """
    root = (
        resources.files("stargram.i18n").joinpath("locales")
        if directory is None
        else Path(directory)
    )

    tables: dict[str, dict[str, object]] = {}
    for entry in root.iterdir():
        if not entry.is_file() or not entry.name.endswith(_LOCALE_SUFFIX):
            continue
        try:
            content = entry.read_bytes()
        except OSError as exc:
            raise ConfigError.invalid_locale_file(entry.name, str(exc)) from exc
        locale = entry.name.removesuffix(_LOCALE_SUFFIX)
        tables[locale] = _decode_table(entry.name, content)

    return LocaleCatalog.from_tables(tables)


__all__ = ["LocaleCatalog", "load_catalog"]
