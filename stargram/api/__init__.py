"""Stargram HTTP API layer.

This package provides the Falcon Asynchronous Server Gateway Interface
(ASGI) application serving ``POST /webhook``.

Public API
----------
create_app
    Application factory wiring the webhook resource, error handlers and
    lifespan middleware.
AppDependencies
    Configuration, renderer and notifier consumed by ``create_app``.
"""

from stargram.api.app import AppDependencies, create_app

__all__ = ["AppDependencies", "create_app"]
