"""femtologging setup and message helpers for ghactivity.

The engine never configures logging on import. Callers that want the
``activity.*`` events on a console call :func:`configure_logging` (or
:func:`configure_engine_logging` with an :class:`EngineConfig`) once at
start-up. Modules obtain loggers with :func:`get_logger` and emit messages
through the ``log_*`` helpers, which format the text eagerly because
femtologging loggers accept a finished message rather than a template.

Example:
>>> from ghactivity.logging import get_logger, log_warning
>>> logger = get_logger(__name__)
>>> log_warning(logger, "Skipped %s event %s", "MemberEvent", "1001")

"""

from __future__ import annotations

import enum
import typing as typ

from femtologging import basicConfig, get_logger

if typ.TYPE_CHECKING:
    from ghactivity.config import EngineConfig


class LogLevel(enum.StrEnum):
    """Level names femtologging accepts."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


DEFAULT_LOG_LEVEL = LogLevel.INFO

_logger = get_logger(__name__)


def normalize_log_level(level: str | None) -> tuple[str, bool]:
    """Map a user-supplied level name onto a :class:`LogLevel` value.

    Parameters
    ----------
    level : str | None
        Level name in any case, possibly padded with whitespace.

    Returns
    -------
    tuple[str, bool]
        The level to use and whether the input had to be replaced by
        :data:`DEFAULT_LOG_LEVEL`.

    """
    candidate = (level or "").strip().upper()
    try:
        return (LogLevel(candidate).value, False)
    except ValueError:
        return (DEFAULT_LOG_LEVEL.value, True)


def configure_logging(level: str | None, *, force: bool = False) -> tuple[str, bool]:
    """Install femtologging's basic console handler at ``level``.

    Parameters
    ----------
    level : str | None
        Requested level name. Unknown names fall back to INFO and are
        reported with a warning once the handler is in place.
    force : bool, optional
        Replace handlers already attached to the root logger.

    Returns
    -------
    tuple[str, bool]
        The level that was applied and whether ``level`` was rejected.

    """
    applied, rejected = normalize_log_level(level)
    basicConfig(level=applied, force=force)
    if rejected:
        log_warning(
            _logger, "Unknown log level %r; using %s instead", level, applied
        )
    return (applied, rejected)


def configure_engine_logging(
    config: EngineConfig, *, force: bool = False
) -> tuple[str, bool]:
    """Apply the level carried by an :class:`EngineConfig`."""
    return configure_logging(config.log_level, force=force)


class _LoggerLike(typ.Protocol):
    """The part of a femtologging logger the helpers call."""

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
    logger: _LoggerLike, level: LogLevel, template: str, args: tuple[object, ...]
) -> None:
    message = template % args if args else template
    logger.log(level.value, message, exc_info=None, stack_info=False)


def log_info(logger: _LoggerLike, template: str, *args: object) -> None:
    """Emit ``template % args`` at INFO."""
    _emit(logger, LogLevel.INFO, template, args)


def log_warning(logger: _LoggerLike, template: str, *args: object) -> None:
    """Emit ``template % args`` at WARNING."""
    _emit(logger, LogLevel.WARNING, template, args)


__all__ = [
    "DEFAULT_LOG_LEVEL",
    "LogLevel",
    "configure_engine_logging",
    "configure_logging",
    "get_logger",
    "log_info",
    "log_warning",
    "normalize_log_level",
]
