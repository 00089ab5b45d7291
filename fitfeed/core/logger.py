"""Loguru configuration for the API process and scripts."""

import sys
from typing import Any

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def setup_logger(level: str = "INFO", sink: Any = None) -> None:
    """Replace loguru's default handler with a single sink at the given level.

    Args:
        level: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        sink: Any loguru sink; stderr with colour when omitted
    """
    logger.remove()
    logger.add(
        sink if sink is not None else sys.stderr,
        format=CONSOLE_FORMAT,
        level=level,
        colorize=sink is None,
        diagnose=False,
    )
    logger.debug(f"Logger initialized with level={level}")
