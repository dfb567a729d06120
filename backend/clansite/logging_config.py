import logging
import logging.config
from typing import Optional

from clansite.config import Settings, get_settings

# Storage drivers are chatty at DEBUG (aiosqlite logs every cursor call)
STORAGE_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "redis")


def _console_logger(level: str) -> dict:
    return {"handlers": ["console"], "level": level, "propagate": False}


def setup_logging(settings: Optional[Settings] = None):
    """
    Configure global log format

    One console handler shared by clansite, uvicorn and the storage drivers.
    Driver loggers stay at WARNING so backend failures surface without the
    per-statement noise; SQL statements are echoed by the engine when DEBUG is on.
    """
    settings = settings or get_settings()
    log_level = "DEBUG" if settings.DEBUG else "INFO"

    loggers = {
        "root": {
            "handlers": ["console"],
            "level": log_level,
            "propagate": True,
        },
        "clansite": _console_logger(log_level),
    }
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        loggers[name] = _console_logger("INFO")
    for name in STORAGE_LOGGERS:
        loggers[name] = _console_logger("WARNING")

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": loggers,
        }
    )
