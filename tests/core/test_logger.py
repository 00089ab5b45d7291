"""Tests for logger setup."""

from loguru import logger

from fitfeed.config.settings import settings
from fitfeed.core.logger import setup_logger


def test_level_filters_lower_messages():
    messages = []
    setup_logger(level="WARNING", sink=messages.append)

    try:
        logger.info("[FEED] hidden")
        logger.warning("[FEED] shown")
    finally:
        setup_logger(level=settings.log_level)

    assert len(messages) == 1
    assert "WARNING" in messages[0]
    assert "[FEED] shown" in messages[0]
