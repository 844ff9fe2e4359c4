"""
Logging helpers for seqcluster.

Every module gets its logger through ``get_logger(__name__)`` so that all
records live under the ``seqcluster`` namespace. Nothing is printed unless the
application calls ``setup_logging`` (or configures logging itself).

Usage:
    from seqcluster.utils.logging_config import get_logger, setup_logging

    setup_logging("DEBUG")
    logger = get_logger(__name__)
"""

import logging
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "seqcluster"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger inside the ``seqcluster`` namespace.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        Logger named ``seqcluster.<name>`` (or ``name`` if already namespaced)
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(
    level: Optional[Union[str, int]] = None,
    fmt: Optional[str] = None,
) -> logging.Logger:
    """
    Attach a single stream handler to the package logger.

    Calling this more than once only updates the level and format.

    Args:
        level: Log level name or number. Defaults to the configured
            ``log_level`` (``SEQCLUSTER_LOG_LEVEL``).
        fmt: Optional ``logging.Formatter`` format string

    Returns:
        The package root logger
    """
    if level is None:
        from ..config import config

        level = config.log_level
    if isinstance(level, str):
        level = level.upper()

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    formatter = logging.Formatter(fmt or DEFAULT_FORMAT)
    handler = next(
        (h for h in root.handlers if getattr(h, "_seqcluster_handler", False)),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler._seqcluster_handler = True
        root.addHandler(handler)
    handler.setFormatter(formatter)
    return root
