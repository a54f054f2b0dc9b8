"""Package logger.

The library only emits records; handlers are left to the application.
configure_logging() is what the command-line tool uses.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "javastream"

logger = logging.getLogger(ROOT_LOGGER)


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    """Send javastream log records to stderr through rich."""
    logger.setLevel(level)

    if not logger.handlers:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger
