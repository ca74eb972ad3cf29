"""
Logging utilities for consistent logging setup across the application.
"""

import logging


def setup_logger(logger: logging.Logger, log_level: int, log_format: str) -> None:
    """
    Set up a logger with a StreamHandler and standard formatter.

    Args:
        logger: The logger instance to configure
        log_level: The logging level to set
        log_format: Format string for the handler, usually Config.LOG_FORMAT
    """
    logger.setLevel(log_level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(log_format))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(log_level)
