# app/core/logging.py
import logging
import logging.config
from typing import Any

from app.core.config import settings

CHANNEL_PREFIX = "cms"


def configure_logging(level: str | None = None) -> None:
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "root": {
                "handlers": ["console"],
                "level": (level or settings.log_level).upper(),
            },
        }
    )


def channel_logger(channel: str) -> logging.Logger:
    return logging.getLogger(f"{CHANNEL_PREFIX}.{channel}")


def send_log(channel: str, actor_id: Any, message: str) -> None:
    """
    Record an operational failure against the user that triggered it.

    Channels are plain logger names under ``cms.`` (e.g. ``cms.errors``), so
    routing them somewhere else is a logging-config concern.
    """
    channel_logger(channel).error(
        "actor=%s %s", actor_id, message, extra={"actor_id": str(actor_id)}
    )
