"""
Logging setup for applications embedding bn_enumeration.

The library modules only create loggers; call ``setup_logging`` once from the
application if you want to see their output.
"""

import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "bn_enumeration"


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Attach a formatted stream handler to the bn_enumeration logger.

    Repeated calls replace the previous handler instead of stacking them.
    """
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False
    return logger
