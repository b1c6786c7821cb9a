"""
Logging setup.

Every module logs through logging.getLogger(__name__). setup_logging() is
called once on startup and picks plain text or JSON lines (python-json-logger)
based on LOG_JSON.
"""

import logging
import sys

from pythonjsonlogger.json import JsonFormatter

from app.core.config import get_settings

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging() -> logging.Logger:
    """Configure the root logger from settings."""
    settings = get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    if settings.log_json:
        handler.setFormatter(JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"levelname": "level", "name": "logger"}
        ))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]

    # SQL echo only in debug mode
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.debug else logging.WARNING)

    root.info("Logging configured", extra={"log_level": settings.log_level, "json": settings.log_json})
    return root
