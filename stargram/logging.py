"""Logging helpers wrapping femtologging.

Stargram pre-formats every message with percent-style interpolation before
handing it to femtologging, so call sites read like the standard library
while the backend only ever sees finished strings.

Example:
>>> from stargram.logging import get_logger, log_info
>>> logger = get_logger(__name__)
>>> log_info(logger, "Relaying %s events", "star")

"""

from __future__ import annotations

import enum
import typing as typ

from femtologging import basicConfig, get_logger


class LogLevel(enum.StrEnum):
    """Log levels accepted by femtologging."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


_DEFAULT_LEVEL = LogLevel.INFO


def normalize_log_level(level: str | None) -> tuple[str, bool]:
    """Normalize a raw ``LOG_LEVEL`` value.

    Parameters
    ----------
    level : str | None
        Raw level name, typically read from the environment.

    Returns
    -------
    tuple[str, bool]
        The normalized level and ``True`` when the input was unusable and
        the default was substituted.

    """
    normalized = (level or "").strip().upper()
    if normalized in LogLevel.__members__:
        return (normalized, False)
    return (str(_DEFAULT_LEVEL), True)


def configure_logging(level: str | None, *, force: bool = False) -> tuple[str, bool]:
    """Configure the femtologging root handler.

    Parameters
    ----------
    level : str | None
        Raw level name to normalize before configuring.
    force : bool, optional
        Replace existing handler configuration when ``True``.

    Returns
    -------
    tuple[str, bool]
        The level actually applied and the invalid-input flag from
        :func:`normalize_log_level`.

    """
    normalized, invalid = normalize_log_level(level)
    basicConfig(level=normalized, force=force)
    return (normalized, invalid)


def format_log_message(template: str, *args: object) -> str:
    """Interpolate ``args`` into ``template`` using ``%`` formatting."""
    if not args:
        return template
    return template % args


class _SupportsLog(typ.Protocol):
    """Protocol for femtologging-compatible loggers."""

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str | None: ...


def _emit(
    logger: _SupportsLog,
    level: LogLevel,
    template: str,
    args: tuple[object, ...],
    exc_info: object | None,
) -> None:
    logger.log(
        str(level),
        format_log_message(template, *args),
        exc_info=exc_info,
        stack_info=False,
    )


def log_debug(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log a DEBUG message with percent-style formatting."""
    _emit(logger, LogLevel.DEBUG, template, args, exc_info)


def log_info(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log an INFO message with percent-style formatting."""
    _emit(logger, LogLevel.INFO, template, args, exc_info)


def log_warning(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log a WARNING message with percent-style formatting."""
    _emit(logger, LogLevel.WARNING, template, args, exc_info)


def log_error(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log an ERROR message with percent-style formatting."""
    _emit(logger, LogLevel.ERROR, template, args, exc_info)


def log_exception(logger: _SupportsLog, message: str, exc: BaseException) -> None:
    """Log ``message`` at ERROR with ``exc`` attached as exception info.

    ``message`` is emitted verbatim; it is not treated as a template.
    """
    logger.log(str(LogLevel.ERROR), message, exc_info=exc, stack_info=False)


__all__ = [
    "LogLevel",
    "configure_logging",
    "format_log_message",
    "get_logger",
    "log_debug",
    "log_error",
    "log_exception",
    "log_info",
    "log_warning",
    "normalize_log_level",
]
