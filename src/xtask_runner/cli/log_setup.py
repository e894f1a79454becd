"""Logging configuration for the CLI process.

``core`` and ``infra`` only ever call ``logging.getLogger(__name__)``;
handlers are attached here, once, by the entry point.
"""

from __future__ import annotations

import logging
import sys

_LOGGER_NAME = "xtask_runner"


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Uses :class:`rich.logging.RichHandler` when Rich is installed and a
    plain :class:`logging.StreamHandler` otherwise.  Calling this again
    replaces the previously installed handler.
    """
    level = logging.DEBUG if verbose else logging.INFO
    handler: logging.Handler
    try:
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)-7s %(message)s"))
    else:
        from xtask_runner.cli.console import get_rich_console

        handler = RichHandler(
            console=get_rich_console(),
            show_time=False,
            show_path=verbose,
            markup=False,
        )

    logger = logging.getLogger(_LOGGER_NAME)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
