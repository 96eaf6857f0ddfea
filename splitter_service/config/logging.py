"""Structured logging setup. Read-only config; no business logic."""

import logging
import sys
from typing import Any

from splitter_service.config.settings import get_settings

# Attributes every LogRecord carries; anything else arrived through `extra=`.
_RECORD_ATTRS = set(vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))) | {"message", "asctime"}


class ExtraFormatter(logging.Formatter):
    """Formatter that appends structured `extra` fields as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        if not fields:
            return line
        return line + " | " + " ".join(f"{k}={v!r}" for k, v in sorted(fields.items()))


def configure_logging(level_name: str | None = None) -> None:
    """Configure structured logging on the root logger. DEBUG when settings.debug is set."""
    settings = get_settings()
    level = getattr(logging, (level_name or settings.log_level).upper(), logging.INFO)
    if settings.debug:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        ExtraFormatter(fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s", datefmt="%Y-%m-%dT%H:%M:%S")
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # tiktoken downloads encodings with requests on first use
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name."""
    return logging.getLogger(name)


def log_extra(extra: dict[str, Any]) -> dict[str, Any]:
    """Build kwargs for logger.warning(..., **log_extra({...})) carrying structured fields."""
    return {"extra": extra}
