"""Render localized messages from catalog templates."""

from __future__ import annotations

import re
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from stargram.i18n.catalog import LocaleCatalog

# i18next-style placeholders: {{name}} with optional inner whitespace
_PLACEHOLDER = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")


def interpolate(template: str, fields: cabc.Mapping[str, object]) -> str:
    """Substitute ``{{name}}`` placeholders with values from ``fields``.

    Values are inserted verbatim via ``str()``. Unreferenced fields are
    ignored and placeholders without a field become the empty string.

    Examples
    --------
    >>> interpolate("{{who}} starred {{repo}}", {"who": "torvalds"})
    'torvalds starred '

    """

    def _substitute(match: re.Match[str]) -> str:
        value = fields.get(match.group(1))
        return "" if value is None else str(value)

    return _PLACEHOLDER.sub(_substitute, template)


class MessageRenderer:
    """Resolve and interpolate templates for one locale chain.

    Parameters
    ----------
    catalog
        Loaded locale tables.
    locale
        Active locale, consulted first.
    fallback_locale
        Locale consulted when the active one lacks a key.

    """

    def __init__(
        self,
        catalog: LocaleCatalog,
        locale: str,
        fallback_locale: str,
    ) -> None:
        """Store the catalog and the lookup chain."""
        self._catalog = catalog
        chain = [locale]
        if fallback_locale != locale:
            chain.append(fallback_locale)
        self._locales = tuple(chain)

    @property
    def locales(self) -> tuple[str, ...]:
        """Return the lookup chain, active locale first."""
        return self._locales

    def render(
        self,
        key: str,
        fields: cabc.Mapping[str, object] | None = None,
    ) -> str:
        """Render the template stored under ``key``.

        Parameters
        ----------
        key
            Dotted template key.
        fields
            Interpolation values. Omit for keys without placeholders.

        Returns
        -------
        str
            The rendered text.

        Raises
        ------
        TemplateMissingError
            If no locale in the chain defines ``key``.

        """
        template = self._catalog.resolve(key, self._locales)
        return interpolate(template, fields or {})


__all__ = ["MessageRenderer", "interpolate"]
