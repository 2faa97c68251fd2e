"""Centralized logging configuration for tourmap.

Every module logs through a child of the ``tourmap`` root logger obtained with
`get_logger(__name__)`. What the package emits, by logger:

- ``tourmap.routing.client``: each directions request and each "no route"
  outcome at DEBUG; unrecognized service statuses at WARNING.
- ``tourmap.routing.transport``: render probe status codes at DEBUG.
- ``tourmap.graph.path_graph``: point additions, removals and rebuilds at
  DEBUG; visible paths dropped by a travel mode change at WARNING; the mode
  change itself at INFO.
- ``tourmap.render.request``: markers and paths left out of an over-budget
  render request at DEBUG.
- ``tourmap.session``: credential setup at DEBUG.
- ``tourmap.cli``: progress and timings at INFO; closed tour legs without a
  route at WARNING; command failures at ERROR.

The CLI maps ``--verbose`` to DEBUG and ``--quiet`` to WARNING through
`set_global_log_level`.
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "tourmap"

# Set once the package root logger has its handler
_ROOT_LOGGER_CONFIGURED = False


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Set up the root tourmap logger with a single handler.

    Repeated calls are ignored until `reset_logging` is called.

    Args:
        level: Logging level (default: INFO).
        format_string: Custom format string (optional).
        handler: Custom handler (optional, defaults to a stdout StreamHandler).
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    if handler is None:
        handler = logging.StreamHandler(sys.stdout)

    handler.setFormatter(logging.Formatter(format_string))
    root_logger.addHandler(handler)

    # Propagate so pytest's caplog sees package records
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger that inherits the package root configuration.

    Args:
        name: Logger name (typically ``__name__`` of the calling module).

    Returns:
        Logger instance with level NOTSET so the root level applies.
    """
    setup_root_logger()

    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the log level for all tourmap loggers.

    Args:
        level: Logging level (e.g., logging.DEBUG, logging.INFO).
    """
    setup_root_logger()

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    """Enable debug logging for the entire package."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Disable debug logging, set to INFO level."""
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Reset logging configuration (mainly for testing)."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
