"""femtologging helpers shared by the coordinator, backends and CLI.

Records always carry a finished string: templates are interpolated with
percent-style arguments here, before femtologging sees them.

Example:
>>> from harbourmaster.logging import get_logger, log_info
>>> logger = get_logger(__name__)
>>> log_info(logger, "Dispatching %s", "DeleteCatalog")

"""

from __future__ import annotations

import os
import typing as typ

from femtologging import basicConfig, get_logger

LOG_LEVEL_ENV_VAR = "HARBOURMASTER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"

# Level names femtologging accepts for ``basicConfig`` and ``Logger.log``.
_KNOWN_LEVELS = frozenset(
    {"TRACE", "DEBUG", "INFO", "WARN", "WARNING", "ERROR", "CRITICAL"}
)


class _FemtoLogger(typ.Protocol):
    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str | None: ...


def resolve_log_level(raw: str | None) -> tuple[str, bool]:
    """Map a user-supplied level name onto one femtologging accepts.

    Parameters
    ----------
    raw : str | None
        Level from ``--log-level`` or ``HARBOURMASTER_LOG_LEVEL``.

    Returns
    -------
    tuple[str, bool]
        The level to use, and ``True`` when ``raw`` was missing or unknown
        and :data:`DEFAULT_LOG_LEVEL` was substituted.

    """
    candidate = (raw or "").strip().upper()
    if candidate in _KNOWN_LEVELS:
        return (candidate, False)
    return (DEFAULT_LOG_LEVEL, True)


def configure_logging(
    level: str | None = None, *, force: bool = False
) -> tuple[str, bool]:
    """Install femtologging's default handler at the resolved level.

    ``level`` wins over ``HARBOURMASTER_LOG_LEVEL``; the result of
    :func:`resolve_log_level` is returned so the caller can warn about a
    substituted default.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR)
    resolved = resolve_log_level(level)
    basicConfig(level=resolved[0], force=force)
    return resolved


def _emit(
    logger: _FemtoLogger,
    level: str,
    template: str,
    args: tuple[object, ...],
    exc_info: object | None,
) -> None:
    message = template % args if args else template
    logger.log(level, message, exc_info=exc_info, stack_info=False)


def log_debug(
    logger: _FemtoLogger, template: str, *args: object, exc_info: object | None = None
) -> None:
    """Emit ``template % args`` at DEBUG."""
    _emit(logger, "DEBUG", template, args, exc_info)


def log_info(
    logger: _FemtoLogger, template: str, *args: object, exc_info: object | None = None
) -> None:
    """Emit ``template % args`` at INFO."""
    _emit(logger, "INFO", template, args, exc_info)


def log_warning(
    logger: _FemtoLogger, template: str, *args: object, exc_info: object | None = None
) -> None:
    """Emit ``template % args`` at WARNING."""
    _emit(logger, "WARNING", template, args, exc_info)


def log_exception(logger: _FemtoLogger, message: str, exc: BaseException) -> None:
    """Emit ``message`` verbatim at ERROR with ``exc`` attached.

    The message is never interpolated, so it may contain ``%``.
    """
    logger.log("ERROR", message, exc_info=exc, stack_info=False)


__all__ = [
    "DEFAULT_LOG_LEVEL",
    "LOG_LEVEL_ENV_VAR",
    "configure_logging",
    "get_logger",
    "log_debug",
    "log_exception",
    "log_info",
    "log_warning",
    "resolve_log_level",
]
