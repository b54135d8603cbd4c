"""Root logger setup for the bot entry points."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(levelname)-8s %(asctime)s %(name)-30s %(message)s"
DATE_FORMAT = "%b %d  %H:%M:%S"

_installed_handler: logging.Handler | None = None


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach a single stderr handler to the root logger and set its level.

    Calling it again replaces the handler installed by the previous call;
    handlers added by anything else are left alone.
    """
    global _installed_handler

    logger = logging.getLogger()
    reset_logging()

    stderr_handler = logging.StreamHandler()
    stderr_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(stderr_handler)
    logger.setLevel(level)
    _installed_handler = stderr_handler
    return logger


def reset_logging() -> None:
    """Remove the handler installed by :func:`configure_logging`, if any."""
    global _installed_handler

    if _installed_handler is not None:
        logging.getLogger().removeHandler(_installed_handler)
        _installed_handler = None


__all__ = ["configure_logging", "reset_logging"]
