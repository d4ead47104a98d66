"""Logging configuration for the CLI and for host applications embedding newsformat."""

from __future__ import annotations

import logging
import sys
from typing import Optional

LIBRARY_LOGGER_NAME = "newsformat"

PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(log_level: int | str) -> int:
    """Return the numeric level for ``log_level``; unknown names mean INFO."""
    if isinstance(log_level, int):
        return log_level
    level = getattr(logging, str(log_level).upper(), logging.INFO)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    library_only: bool = False,
) -> logging.Logger:
    """Attach console (and optionally file) handlers at the requested level.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Optional path to a log file for teeing log output.
    trace_mode : bool, default False
        When true, emit timestamps and logger names for debugging traces.
    library_only : bool, default False
        Configure only the ``newsformat`` logger, leaving the host
        application's root logger untouched. The CLI configures the root.

    Returns
    -------
    logging.Logger
        The configured logger instance.

    """
    level = resolve_level(log_level)

    target = logging.getLogger(LIBRARY_LOGGER_NAME if library_only else None)
    target.setLevel(level)
    target.handlers.clear()
    if library_only:
        target.propagate = False

    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(PLAIN_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            target.warning("Could not create log file %s: %s", log_file, exc)

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        target.addHandler(handler)

    if len(handlers) > 1:
        target.info("Logging to file: %s", log_file)
    return target
