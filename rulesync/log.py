import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "rulesync"


def resolve_level(verbose: bool = False, silent: bool = False) -> int:
    if silent:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.INFO


def configure_logging(
    verbose: bool = False,
    silent: bool = False,
    console: Optional[Console] = None,
) -> logging.Logger:
    """Route the package logger through a single RichHandler.

    Calling this more than once replaces the previous handler, so the CLI can
    reconfigure after loading ``rulesync.json``.
    """
    level = resolve_level(verbose=verbose, silent=silent)
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        level=level,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
