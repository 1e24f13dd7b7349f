"""
Logging setup for the search module.

All modules obtain their logger through get_logger(__name__). Structured
context is attached with the ``extra`` argument and rendered by the console
formatter as trailing key=value pairs.
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "simple_ai_search"

# Attributes present on every LogRecord; anything else came in through `extra`.
_RESERVED_ATTRS = set(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}

_configured = False


class ExtraFieldsFormatter(logging.Formatter):
    """Formatter that appends `extra` fields to the log line."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        if not extras:
            return base
        rendered = " ".join(f"{key}={value!r}" for key, value in extras.items())
        return f"{base} | {rendered}"


def setup_logging(level: Optional[str] = None, console: Optional[bool] = None) -> None:
    """Configure the package logger from settings. Safe to call repeatedly."""
    global _configured
    from .settings import settings

    level_name = (level or settings.log_level or "INFO").upper()
    enable_console = (
        settings.enable_console_logging if console is None else console
    )

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(getattr(logging, level_name, logging.INFO))

    if _configured:
        return

    if enable_console:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            ExtraFieldsFormatter(
                "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root.addHandler(handler)
    else:
        root.addHandler(logging.NullHandler())

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package root logger."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
