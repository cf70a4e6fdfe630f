"""Logging configuration for the cratepure CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

MESSAGE_ONLY_FORMAT = "%(message)s"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Install a single stderr RichHandler on the cratepure logger.

    Handlers from earlier calls are replaced so repeated CLI invocations in
    one process do not duplicate output.
    """
    logger = logging.getLogger("cratepure")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=verbose,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(MESSAGE_ONLY_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return logger
