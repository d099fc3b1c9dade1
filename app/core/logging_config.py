import logging

from app.core.config import get_settings


def configure_logging():
    """Configure basic logging for the application.

    Uses a simple format including time, level, logger name and message.
    Safe to call repeatedly (uvicorn --reload, tests).
    """
    if logging.getLogger().handlers:
        return
    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    logging.basicConfig(level=get_settings().log_level.upper(), format=fmt)


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)
