"""
Logging setup for the devfleet SDK.

Console output goes through rich's RichHandler; with log_json enabled each
record is written as one JSON line instead. Library modules only call
get_logger(); handlers are installed by setup_logging() (the CLI does this).
"""

from __future__ import annotations

import json
import logging
import sys

from rich.logging import RichHandler

ROOT_LOGGER = "devfleet"

_configured = False


class JsonLineHandler(logging.StreamHandler):
    """Write each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            data["exc_info"] = logging.Formatter().formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False)


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the devfleet namespace."""
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def setup_logging(
    level: str | None = None,
    json_mode: bool | None = None,
    force: bool = False,
) -> logging.Logger:
    """
    Install a handler on the devfleet root logger.

    Args:
        level: Log level name; defaults to settings.log_level
        json_mode: JSON lines instead of rich output; defaults to settings.log_json
        force: Replace handlers installed by an earlier call

    Returns:
        The devfleet root logger
    """
    global _configured
    logger = logging.getLogger(ROOT_LOGGER)
    if _configured and not force:
        return logger

    from devfleet.config import get_settings

    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    use_json = settings.log_json if json_mode is None else json_mode

    handler: logging.Handler
    if use_json:
        handler = JsonLineHandler(sys.stderr)
    else:
        handler = RichHandler(rich_tracebacks=True, markup=False, show_path=False)

    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    logger.propagate = False
    _configured = True
    return logger


__all__ = ["get_logger", "setup_logging", "JsonLineHandler", "ROOT_LOGGER"]
