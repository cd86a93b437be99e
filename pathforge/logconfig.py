"""
Logging setup for PathForge.

The package modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves. Front ends call ``setup_logging`` once to
route the ``pathforge`` logger hierarchy to stderr and, optionally, a file.
Stdout stays free for the command line progress bar.
"""

from __future__ import annotations
import logging
import sys
from typing import Optional

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def level_for_verbosity(verbose: bool) -> int:
    """Log level used by the command line: per-tile detail when verbose."""
    return logging.DEBUG if verbose else logging.WARNING


def setup_logging(name: str = 'pathforge', level: int = logging.WARNING,
                  log_format: str = DEFAULT_FORMAT,
                  log_file: Optional[str] = None) -> logging.Logger:
    """Configure the renderer's logger.

    Calling this again replaces the handlers from the previous call, so
    repeated renders in one process do not duplicate log lines.

    Args:
        name: Logger to configure; its children (pathforge.renderer,
            pathforge.scene_parser, ...) inherit the handlers
        level: Minimum level that is emitted
        log_format: Format string for every handler
        log_file: Optional path that receives a copy of the log

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.hasHandlers():
        logger.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    formatter = logging.Formatter(log_format)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    # Keep render logs out of the root logger's handlers
    logger.propagate = False

    return logger
