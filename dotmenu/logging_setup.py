"""loguru configuration for the command line."""

import sys

from loguru import logger


def setup_logging(verbose: bool = False) -> None:
    """Route loguru to stderr; warnings only unless ``verbose``."""

    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format="<level>{level}</level>: {message}",
        colorize=None,
    )
