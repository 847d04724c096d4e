"""
Logging configuration for the league API.
Console output with timestamps; level comes from settings.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once.

    Args:
        level: level name, e.g. "DEBUG" or "info". Unknown names fall back to INFO.
    """
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear existing handlers to avoid duplicates on reload
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(console_handler)

    # asyncpg and uvicorn access logs are noisy at DEBUG
    logging.getLogger("asyncpg").setLevel(max(log_level, logging.INFO))
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    root_logger.info("Logging configured at %s", logging.getLevelName(log_level))
