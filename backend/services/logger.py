"""
Logging setup for the storefront backend.

One stdout handler on the "storefront" logger, level taken from LOG_LEVEL.
"""
import logging
import sys

from config import LOG_LEVEL

logger = logging.getLogger("storefront")
logger.setLevel(LOG_LEVEL)

if not logger.handlers:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(LOG_LEVEL)
    console_handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(console_handler)

# Avoid duplicate lines through the root logger
logger.propagate = False


def get_logger(name: str = None) -> logging.Logger:
    """Return the storefront logger, or a child named storefront.<name>."""
    if name:
        return logging.getLogger(f"storefront.{name}")
    return logger
