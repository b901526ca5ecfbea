import logging
import logging.handlers
import sys
from pathlib import Path

from src import config

APP_LOGGER_NAME = "family_budget"

# Engine loggers keep their own level while SQL_ECHO is on
ENGINE_LOGGERS = ["sqlalchemy.engine", "sqlalchemy.engine.Engine"]
LIBRARY_LOGGERS = ["sqlalchemy.pool", "sqlalchemy.orm", "alembic", "faker", "uvicorn.access", "uvicorn.error", "httpx"]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _level(name: str, fallback: int) -> int:
    return getattr(logging, name.upper(), fallback)


def _file_handler(log_file: str) -> logging.Handler:
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    return logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=config.LOG_FILE_MAX_BYTES,
        backupCount=config.LOG_FILE_BACKUPS
    )


def setup_logging() -> logging.Logger:
    """
    Configure the ``family_budget`` logger from the settings in ``src.config``.

    Budget records are logged to stdout, and also to a rotating ``LOG_FILE``
    when one is set. Library loggers are held at ``THIRD_PARTY_LOG_LEVEL`` so
    request and pool chatter stays out of the budget log. Safe to call
    again: existing handlers are replaced.
    """
    app_level = _level(config.APP_LOG_LEVEL, logging.INFO)
    library_level = _level(config.THIRD_PARTY_LOG_LEVEL, logging.WARNING)

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(app_level)
    app_logger.handlers.clear()
    app_logger.propagate = False

    handlers = [logging.StreamHandler(sys.stdout)]
    if config.LOG_FILE:
        handlers.append(_file_handler(config.LOG_FILE))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    for handler in handlers:
        handler.setLevel(app_level)
        handler.setFormatter(formatter)
        app_logger.addHandler(handler)

    quieted = LIBRARY_LOGGERS if config.SQL_ECHO else LIBRARY_LOGGERS + ENGINE_LOGGERS
    for logger_name in quieted:
        logging.getLogger(logger_name).setLevel(library_level)

    return app_logger


def get_logger(name: str = APP_LOGGER_NAME) -> logging.Logger:
    """Module loggers hang off ``family_budget`` so they share its handlers."""
    if name == APP_LOGGER_NAME or name.startswith(f"{APP_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")
