"""
ColorCraft Structured Logging
Loguru sink setup plus a small wrapper that attaches request context as extras.
"""
import sys
from typing import Any, Dict, Optional

from loguru import logger

from colorcraft.config import config

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name} | {message} | {extra}"


def configure_logging(level: Optional[str] = None, serialize: Optional[bool] = None) -> None:
    """Replace loguru's default handler with a single stdout sink."""
    logger.remove()
    logger.add(
        sys.stdout,
        format=LOG_FORMAT,
        level=level or config.LOG_LEVEL,
        serialize=config.LOG_JSON if serialize is None else serialize,
    )


class StructuredLogger:
    """Structured logger for the ColorCraft palette service."""

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        self.context = dict(context or {})

    def bind(self, **context) -> "StructuredLogger":
        """Logger carrying extra context (request id, mode, ...) on every record."""
        return StructuredLogger({**self.context, **context})

    def _log(self, level: str, message: str, extra: Optional[Dict[str, Any]]):
        fields = {**self.context, **(extra or {})}
        # depth=2 reports the caller of info()/warning()/... as the record origin
        target = logger.bind(**fields) if fields else logger
        target.opt(depth=2).log(level, message)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("INFO", message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("WARNING", message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("ERROR", message, extra)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("DEBUG", message, extra)


# Global logger instance
_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get the global logger, configuring the sink on first use."""
    global _logger
    if _logger is None:
        configure_logging()
        _logger = StructuredLogger()
    return _logger
