"""Stargram runtime entrypoint.

This module provides the ASGI application factory used by Granian and the
``stargram`` console script. Configuration is read once from the
environment, after loading a ``.env`` file from the working directory when
one exists (variables already set take precedence).

Run the service directly with ``python -m stargram.runtime``.
"""

from __future__ import annotations

import typing as typ

from dotenv import find_dotenv, load_dotenv

from stargram.config import RelayConfig
from stargram.errors import ConfigError
from stargram.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    import falcon.asgi

__all__ = ["create_app", "load_config", "main"]

logger = get_logger(__name__)


def load_config() -> RelayConfig:
    """Load ``.env`` and build the relay configuration.

    Raises
    ------
    SystemExit
        If required configuration is missing or invalid.

    """
    load_dotenv(find_dotenv(usecwd=True), override=False)
    try:
        return RelayConfig.from_env()
    except ConfigError as exc:
        # Configuration errors need no traceback
        log_error(logger, "Refusing to start: %s", exc)
        raise SystemExit(1) from exc


def create_app() -> falcon.asgi.App:
    """Create the Falcon ASGI application from the environment.

    Returns
    -------
    falcon.asgi.App
        Configured application serving ``POST /webhook``.

    Raises
    ------
    SystemExit
        If configuration or locale tables are invalid.

    """
    from stargram.api.app import create_app as _create_api_app
    from stargram.api.factory import build_dependencies

    config = load_config()
    # Granian workers are separate processes; configure logging in each.
    configure_logging(config.log_level)
    try:
        dependencies = build_dependencies(config)
    except ConfigError as exc:
        log_error(logger, "Refusing to start: %s", exc)
        raise SystemExit(1) from exc
    return _create_api_app(dependencies)


def main() -> None:
    """Start the stargram server using Granian.

    Validates configuration up front so a misconfigured process exits
    before binding the port.
    """
    from granian import Granian
    from granian.constants import Interfaces

    config = load_config()

    normalized_level, invalid_level = configure_logging(config.log_level)
    if invalid_level:
        log_warning(
            logger,
            "Invalid LOG_LEVEL %r, falling back to %s",
            config.log_level,
            normalized_level,
        )

    if config.debug:
        log_warning(
            logger,
            "DEBUG is enabled: webhook signatures are NOT verified",
        )

    log_info(
        logger,
        "Webhook server on http://%s:%d/webhook (locale=%s, log_level=%s)",
        config.host,
        config.port,
        config.language,
        normalized_level,
    )

    server = Granian(
        "stargram.runtime:create_app",
        address=config.host,
        port=config.port,
        interface=Interfaces.ASGI,
        factory=True,
    )
    server.serve()


if __name__ == "__main__":
    main()
