"""Process-wide logging setup."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from umshado.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Libraries that are noisy at INFO
_QUIET_LOGGERS = ("urllib3", "sqlalchemy.engine", "httpx")


class LoggingConfig:
    """Configure the root logger once; later instantiations are no-ops."""

    _configured = False

    def __init__(self, level: Optional[str] = None) -> None:
        if LoggingConfig._configured:
            return
        level_name = (level or get_settings().log_level or "INFO").upper()
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root = logging.getLogger()
        root.handlers = [handler]
        root.setLevel(getattr(logging, level_name, logging.INFO))
        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
        LoggingConfig._configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the application."""
    return logging.getLogger(f"umshado.{name}")
