"""
Logging setup for command-line runs.

Library modules only create `logging.getLogger(__name__)` loggers; handlers
and level are configured here, once, by the entry point.
"""

import logging

from .config import LOG_FORMAT, LOG_LEVEL


def configure_logging(level: str = None):
    """Configure root logging once for command-line runs."""
    level_name = (level or LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
