"""Logging configuration with Rich formatting.

Provides setup_logging() for app initialization and get_logger() for component loggers.
Component names ("api", "socketmode", "dispatcher", ...) show up as the log line prefix.
"""

import logging
import sys
from rich.console import Console
from rich.logging import RichHandler

def setup_logging(level: str = "INFO", debug_sdk: bool = False):
    logging.basicConfig(
        level=level.upper(),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(file=sys.stdout), rich_tracebacks=True)],
        force=True,
    )

    # The SDK is chatty; only show it when asked to
    sdk_level = logging.DEBUG if debug_sdk else logging.WARNING
    logging.getLogger("api").setLevel(sdk_level)
    logging.getLogger("socketmode").setLevel(sdk_level)
    logging.getLogger("slack_sdk").setLevel(sdk_level)

def get_logger(name: str):
    return logging.getLogger(name)
