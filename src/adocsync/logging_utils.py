"""Logging setup for editor processes that embed adocsync.

The serializer and the sync controller log through module loggers under the
``adocsync`` namespace. The controller traces every propagation, echo and
click at DEBUG; those traces stay hidden unless trace mode is on.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "adocsync"
SYNC_LOGGER = "adocsync.sync"

_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
_PLAIN_FORMAT = "%(levelname)s: %(message)s"


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def _is_own_handler(handler: logging.Handler) -> bool:
    return getattr(handler, "_adocsync_handler", False)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    propagate: bool = False,
) -> logging.Logger:
    """Attach console (and optional file) handlers to the ``adocsync`` logger.

    Calling this again replaces the handlers installed by the previous call;
    handlers added by the host application are left alone.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Path of a file to tee log output into.
    trace_mode : bool, default False
        Emit timestamps and logger names, and let the sync controller's
        DEBUG traces through.
    propagate : bool, default False
        Whether records also reach the host's root handlers.

    Returns
    -------
    logging.Logger
        The configured ``adocsync`` logger.

    """
    resolved_level = _resolve_level(log_level)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.DEBUG if trace_mode else resolved_level)
    package_logger.propagate = propagate
    for handler in [h for h in package_logger.handlers if _is_own_handler(h)]:
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        _TRACE_FORMAT if trace_mode else _PLAIN_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S" if trace_mode else None,
    )
    handler_level = logging.DEBUG if trace_mode else resolved_level

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(handler_level)
    console_handler.setFormatter(formatter)
    console_handler._adocsync_handler = True  # type: ignore[attr-defined]
    package_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            package_logger.warning("Could not open log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(handler_level)
            file_handler.setFormatter(formatter)
            file_handler._adocsync_handler = True  # type: ignore[attr-defined]
            package_logger.addHandler(file_handler)
            package_logger.info("Logging to file: %s", log_file)

    # Serializer warnings keep the requested level even while tracing sync
    logging.getLogger(SYNC_LOGGER).setLevel(logging.DEBUG if trace_mode else logging.NOTSET)
    logging.getLogger(f"{PACKAGE_LOGGER}.renderers").setLevel(resolved_level if trace_mode else logging.NOTSET)

    return package_logger
