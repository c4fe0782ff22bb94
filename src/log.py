"""Log utilities."""

import logging
from rich.logging import RichHandler

FORMAT = "%(message)s"


def get_logger(name: str) -> logging.Logger:
    """Retrieve logger with the provided name.

    The logger has its own rich handler and takes its level from the root
    logger, which is set by `configure_logging`.
    """
    logger = logging.getLogger(name)
    logger.handlers = [RichHandler()]
    logger.propagate = False
    return logger


def configure_logging(verbose: bool = False) -> None:
    """Set up the root logger used by libraries and uvicorn."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=FORMAT,
        datefmt="[%X]",
        handlers=[RichHandler()],
        force=True,
    )
