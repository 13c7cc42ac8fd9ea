"""Logging setup for the API process."""

import logging
import sys

from pythonjsonlogger.json import JsonFormatter

from task_manager.core.config import Settings


NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncio", "httpx", "httpcore")


def configure_logging(settings: Settings) -> None:
    """Configure the root logger from LOG_LEVEL / LOG_FORMAT."""
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    if settings.LOG_FORMAT.lower() == "json":
        formatter = JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"levelname": "level", "asctime": "timestamp"},
        )
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # SQL echo is only wanted in DEBUG
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO if settings.DEBUG else logging.WARNING)
