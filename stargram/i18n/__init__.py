"""Localized message templates.

Public API
----------
LocaleCatalog
    Flattened per-locale template tables with fallback resolution.
load_catalog
    Load the bundled (or a custom directory of) ``<locale>.json`` tables.
MessageRenderer
    Resolve a key along a locale chain and interpolate fields.
interpolate
    Substitute ``{{name}}`` placeholders in a template string.
"""

from __future__ import annotations

from stargram.i18n.catalog import LocaleCatalog, load_catalog
from stargram.i18n.renderer import MessageRenderer, interpolate

__all__ = ["LocaleCatalog", "MessageRenderer", "interpolate", "load_catalog"]
