"""Structured logging for the client.

Every logger handed out by :func:`get_logger` sits under the shared
``openai_http`` logger. That logger alone owns the handlers: one console
handler on ``stderr`` (JSON by default) plus, optionally, one rotating file
handler installed by :func:`configure_logger`. Children propagate to it, so a
record is written once however many modules ask for a logger.

The level comes from ``OPENAI_HTTP_LOG_LEVEL`` when set, otherwise from the
``level`` argument of the first call.

Events are logged as a single JSON object per line through
:func:`log_event`. Request lifecycle events go through
:func:`normalized_log_event`, which always carries ``phase``,
``status_code``, ``latency_ms`` and ``streamed`` (``null`` when unknown) so
log filters can rely on them.

The streaming decoder never logs; its errors go to the caller.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "openai_http"
LOG_LEVEL_ENV = "OPENAI_HTTP_LOG_LEVEL"

_READY_ATTR = "_openai_http_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_openai_http_console_handler"
_FILE_HANDLER_ATTR = "_openai_http_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# 10MB x 5 backups
_FILE_MAX_BYTES = 10 * 1024 * 1024
_FILE_BACKUPS = 5

_LEVEL_NAMES = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _parse_level(value: Optional[str], default: int = logging.INFO) -> int:
    """Map a level name (any case) to its numeric value, else ``default``."""
    if not value:
        return default
    return _LEVEL_NAMES.get(value.strip().upper(), default)


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _is_console(handler: logging.Handler) -> bool:
    return getattr(handler, _CONSOLE_HANDLER_ATTR, False)


def _is_managed_file(handler: logging.Handler) -> bool:
    return getattr(handler, _FILE_HANDLER_ATTR, False)


def _new_console_handler(json_mode: bool, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    return handler


def _close_quietly(handler: logging.Handler) -> None:
    with contextlib.suppress(Exception):
        handler.close()


def _sync_console(logger: logging.Logger, json_mode: bool, level: int) -> None:
    """Point the console handler at the current ``sys.stderr`` and settings.

    ``sys.stderr`` can be swapped after the handler was built (pytest's
    capture does this per test), and a handler on a closed stream is
    replaced.
    """
    for handler in [h for h in logger.handlers if _is_console(h)]:
        stream = getattr(handler, "stream", None)
        if stream is None or getattr(stream, "closed", False):
            logger.removeHandler(handler)
            _close_quietly(handler)
            logger.addHandler(_new_console_handler(json_mode, level))
            continue
        handler.setLevel(level)
        if isinstance(handler, logging.StreamHandler) and handler.stream is not sys.stderr:
            handler.setStream(sys.stderr)
        if json_mode != isinstance(handler.formatter, JsonFormatter):
            handler.setFormatter(_formatter(json_mode))


def _base_logger(json_mode: bool, level: int) -> logging.Logger:
    logger = logging.getLogger(BASE_LOGGER_NAME)
    level = _parse_level(os.getenv(LOG_LEVEL_ENV), default=level)
    logger.setLevel(level)
    if getattr(logger, _READY_ATTR, False):
        _sync_console(logger, json_mode, level)
        return logger
    logger.handlers[:] = [_new_console_handler(json_mode, level)]
    logger.propagate = False
    setattr(logger, _READY_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return ``name``'s logger, wiring up the shared ``openai_http`` logger first."""
    base = _base_logger(json_mode, level)
    if name == BASE_LOGGER_NAME:
        return base
    logger = logging.getLogger(name)
    for handler in [h for h in logger.handlers if _is_console(h)]:
        logger.removeHandler(handler)
        _close_quietly(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Adjust the shared logger at runtime.

    Parameters
    ----------
    level:
        New level, numeric or by name. ``None`` keeps the current one.
    file_path:
        Write to this file through a rotating handler as well, reusing the
        existing handler when it already targets the path. ``None`` removes
        the file handler.
    json_mode:
        JSON or plain text formatting.

    Returns
    -------
    logging.Logger
        The shared ``openai_http`` logger.
    """
    logger = get_logger(BASE_LOGGER_NAME, json_mode=json_mode)
    if level is not None:
        logger.setLevel(_parse_level(level, logger.level) if isinstance(level, str) else level)
        for handler in logger.handlers:
            handler.setLevel(logger.level)

    target = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    keep: Optional[logging.Handler] = None
    for handler in [h for h in logger.handlers if _is_managed_file(h)]:
        if target is not None and keep is None and getattr(handler, "baseFilename", None) == target:
            keep = handler
            continue
        logger.removeHandler(handler)
        _close_quietly(handler)

    if target is None:
        return logger
    if keep is None:
        os.makedirs(os.path.dirname(target), exist_ok=True)
        keep = RotatingFileHandler(target, maxBytes=_FILE_MAX_BYTES, backupCount=_FILE_BACKUPS, encoding="utf-8")
        setattr(keep, _FILE_HANDLER_ATTR, True)
        logger.addHandler(keep)
    keep.setFormatter(_formatter(json_mode))
    keep.setLevel(logger.level)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Log ``{"event": event, **ctx, **fields}`` as one JSON line.

    ``None`` values in ``fields`` are dropped unless ``keep_none`` is set.
    Nothing is serialized when ``level`` is disabled.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event, **(ctx.to_dict() if ctx else {})}
    for key, value in fields.items():
        if value is not None or keep_none:
            payload[key] = value
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "phase",
    "status_code",
    "latency_ms",
    "streamed",
)


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    status_code: int | None = None,
    latency_ms: float | None = None,
    streamed: bool | None = None,
    error_code: str | None = None,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Log a request lifecycle event carrying :data:`REQUIRED_NORMALIZED_KEYS`.

    ``latency_ms`` is rounded to microseconds. ``error_code`` and the
    ``extra_fields`` are only included when not ``None``.
    """
    fields: Dict[str, Any] = {k: v for k, v in extra_fields.items() if v is not None}
    fields.update(
        phase=phase,
        status_code=status_code,
        latency_ms=None if latency_ms is None else round(latency_ms, 3),
        streamed=streamed,
    )
    if error_code is not None:
        fields["error_code"] = error_code
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "BASE_LOGGER_NAME",
    "LOG_LEVEL_ENV",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
