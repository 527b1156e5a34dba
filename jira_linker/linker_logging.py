"""Logging setup for the linker package."""

import logging
import os

LOGGER_NAME = "jira_linker"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Log level name. Defaults to JIRA_LINKER_LOG_LEVEL or INFO.

    Returns:
        The configured package logger
    """
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    level_name = (level or os.environ.get("JIRA_LINKER_LOG_LEVEL", "INFO")).upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    if not _configured:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        _configured = True

    return logger


def get_logger() -> logging.Logger:
    """Get the package logger, configuring it on first use."""
    if not _configured:
        return setup_logging()
    return logging.getLogger(LOGGER_NAME)
