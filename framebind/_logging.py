"""
Logging for framebind.

Every module logs under the "framebind" namespace; nothing is printed unless
the application (or framebind.verbose()) attaches a handler.

Usage:
    from framebind._logging import get_logger

    logger = get_logger(__name__)
    logger.debug("Column 'x' resolved to double")
"""

import logging
from typing import IO, Optional

ROOT_LOGGER = "framebind"

DEFAULT_FORMAT = "%(levelname)s [%(name)s] %(message)s"

# Marks the handler installed by setup_basic_logging
_HANDLER_ATTR = "_framebind_handler"


def get_logger(name: str) -> logging.Logger:
    """Logger inside the framebind namespace (__main__ maps to the root)."""
    if name == "__main__":
        return logging.getLogger(ROOT_LOGGER)
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def setup_basic_logging(
    level: int = logging.INFO,
    format: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """
    Attach one stream handler to the framebind root logger.

    Repeated calls reuse the handler and only move the level, so switching
    verbose(True) -> verbose("debug") actually shows debug records.
    Applications with their own logging config should not call this.

    Args:
        level: Threshold for the logger and its handler
        format: Record format, DEFAULT_FORMAT when None
        stream: Target stream, stderr when None (only used on first call)
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    handler = _installed_handler(logger)
    if handler is None:
        handler = logging.StreamHandler(stream)
        setattr(handler, _HANDLER_ATTR, True)
        logger.addHandler(handler)

    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format or DEFAULT_FORMAT))

    # Records would otherwise print twice under a configured root logger
    logger.propagate = False


def enable_debug_logging() -> None:
    setup_basic_logging(level=logging.DEBUG)


def disable_logging() -> None:
    """Silence framebind entirely, including warnings-level records."""
    logging.getLogger(ROOT_LOGGER).setLevel(logging.CRITICAL + 1)


def _installed_handler(logger: logging.Logger) -> Optional[logging.Handler]:
    for handler in logger.handlers:
        if getattr(handler, _HANDLER_ATTR, False):
            return handler
    return None
