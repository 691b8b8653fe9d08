"""Logging setup for the segdiff command-line interface.

Library modules only create module-level loggers; handlers are installed
here, once per CLI invocation.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

SIMPLE_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Marks handlers installed by configure_logging so repeated calls replace them
_HANDLER_FLAG = "_segdiff_handler"


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def _install(root_logger: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    setattr(handler, _HANDLER_FLAG, True)
    root_logger.addHandler(handler)


def remove_segdiff_handlers(root_logger: Optional[logging.Logger] = None) -> None:
    """Detach and close handlers added by :func:`configure_logging`."""
    root_logger = root_logger or logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_FLAG, False):
            root_logger.removeHandler(handler)
            handler.close()


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Send log records to stderr and optionally to a file.

    Handlers installed by an earlier call are replaced; handlers added by
    other code are left alone.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "DEBUG").
    log_file : str, optional
        Path of a file that receives a copy of every record.
    trace_mode : bool, default False
        Include timestamps and logger names, which makes it possible to
        follow the matching and nesting passes of a comparison.

    Returns
    -------
    logging.Logger
        The root logger.

    """
    level = _resolve_level(log_level)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    remove_segdiff_handlers(root_logger)

    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(SIMPLE_FORMAT)

    _install(root_logger, logging.StreamHandler(sys.stderr), level, formatter)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning(f"Could not open log file {log_file}: {exc}")
        else:
            _install(root_logger, file_handler, level, formatter)
            root_logger.debug(f"Logging to file: {log_file}")

    return root_logger
