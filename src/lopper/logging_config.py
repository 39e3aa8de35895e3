"""Logging configuration for lopper."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure the root logger.

    Args:
        verbose: If True, show INFO level messages
        debug: If True, show DEBUG level messages with timestamps and paths
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers so repeated runs don't duplicate output
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=debug,
        show_path=debug,
        markup=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt="[%(name)s] %(message)s"))
    root_logger.addHandler(handler)

    # GitPython logs every Popen at DEBUG; lopper already logs its own commands
    logging.getLogger("git").setLevel(logging.WARNING)
