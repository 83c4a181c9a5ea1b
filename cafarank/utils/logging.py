"""Logging utilities for cafarank.

Library modules only create loggers under the ``cafarank`` namespace; handlers
are installed by the CLI (or the embedding application) via setup_logging.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def level_for(verbose: bool = False, quiet: bool = False) -> int:
    """Map CLI verbosity flags to a logging level."""
    if quiet:
        return logging.ERROR
    return logging.DEBUG if verbose else logging.INFO


def setup_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """
    Install handlers on the ``cafarank`` logger.
    
    Args:
        level: Logging level
        format_string: Custom format string
        log_file: Optional file to also log to
    """
    root = logging.getLogger("cafarank")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    return logging.getLogger(f"cafarank.{name}")
