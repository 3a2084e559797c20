"""
Logging configuration for the command line entry point.

Every module does ``logger = logging.getLogger(__name__)`` and inherits
this config.
"""

from __future__ import annotations

import logging
import sys

# WARNING level: message only
_FMT_MINIMAL = "%(message)s"

# INFO level: timestamped with module context
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"

# DEBUG level: full diagnostic with file:line
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"

_DATEFMT = "%H:%M:%S"


def setup_logging(level: int = logging.WARNING) -> None:
    """Configure a stderr handler on the root logger.

    Args:
        level: Numeric log level
    """
    if level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT
    elif level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root.setLevel(level)

    # Don't propagate exceptions from logging itself
    logging.raiseExceptions = False
