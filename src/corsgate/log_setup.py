"""
This module provides an environment-variable-based logging setup for corsgate.

Every corsgate module logs through a standard `logging` logger named after the
module. `setup_logging` attaches a single Rich console handler to the
package logger; debug level is enabled by passing ``debug=True`` or by setting
the `CORSGATE_DEBUG` environment variable.
"""

import logging
import os

from rich.logging import RichHandler

PACKAGE_LOGGER = "corsgate"


def is_debug_enabled() -> bool:
    """
    Checks the `CORSGATE_DEBUG` environment variable.

    Returns:
        True if it is set to a truthy value ('true', '1', 'yes').
    """
    return os.environ.get("CORSGATE_DEBUG", "").lower() in ("true", "1", "yes")


def setup_logging(debug: bool | None = None) -> bool:
    """
    Configures the corsgate package logger.

    Calling this more than once replaces the level but never stacks handlers.

    Args:
        debug: Force debug logging on or off. When None, the
            `CORSGATE_DEBUG` environment variable decides.

    Returns:
        True if debug logging is enabled, False otherwise.
    """
    if debug is None:
        debug = is_debug_enabled()

    logger = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    if debug:
        logger.debug("Debug mode enabled")
    return debug
