"""
Conductor - Logging
====================
One logging configuration for the service *and* the ASGI server, so
``[ASSIST]`` / ``[GEMINI]`` lines and uvicorn access lines share a
format and a level.

Level resolution:
  • ``settings.LOG_LEVEL`` if set
  • otherwise ``"dev"`` → DEBUG, ``"prod"`` → WARNING

``build_log_config()`` returns a ``logging.config.dictConfig`` mapping;
``conductor-serve`` hands it to ``uvicorn.run(log_config=...)`` and
``create_app()`` applies it through ``configure_logging()`` so the app
logs correctly under a plain ``uvicorn conductor.src.main:app`` too.

Usage:
    from conductor.src.utils.logger import get_logger
    logger = get_logger(__name__)
"""

import logging
import logging.config
from typing import Any

from conductor.config.settings import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_ENV_LEVEL_MAP = {
    "dev": "DEBUG",
    "prod": "WARNING",
}

# Module loggers are children of "conductor"; uvicorn.error propagates into "uvicorn".
_CONFIGURED_LOGGERS = ("conductor", "uvicorn", "uvicorn.access")


def resolve_level() -> str:
    return settings.LOG_LEVEL or _ENV_LEVEL_MAP.get(settings.ENV, "INFO")


def build_log_config(level: str | None = None) -> dict[str, Any]:
    """
    Build a ``dictConfig`` mapping for the service and uvicorn loggers.

    Args:
        level: Level name override.  If *None*, derived from settings.
    """
    resolved = level or resolve_level()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT},
        },
        "handlers": {
            "console": {"class": "logging.StreamHandler", "formatter": "default", "stream": "ext://sys.stdout"},
        },
        "loggers": {name: {"handlers": ["console"], "level": resolved, "propagate": False} for name in _CONFIGURED_LOGGERS},
    }


def configure_logging(level: str | None = None) -> None:
    logging.config.dictConfig(build_log_config(level))


def get_logger(name: str) -> logging.Logger:
    """Return a module logger; handlers live on the ``conductor`` parent."""
    return logging.getLogger(name)
