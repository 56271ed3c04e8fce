"""Logging setup for chirpmaker.

Records go to stderr in a short human format and, optionally, to a
JSON-lines file. Call context such as the bird being sung or the scale
of a sweep is passed with ``extra={...}``; both formatters pick up the
fields listed in CONTEXT_FIELDS.

Usage:
    from chirpmaker.util.logging import get_logger, configure_logging

    configure_logging(level="DEBUG", json_file="chirps.jsonl")
    logger = get_logger(__name__)
    logger.info("Bird %d is singing", 3, extra={"bird_id": 3})
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Optional

NAMESPACE = "chirpmaker"

# Structured fields copied from ``extra={...}`` into every record.
CONTEXT_FIELDS = ("bird_id", "bird", "scale", "driver", "error_type", "duration_ms")

# Shown after the console message; bird and bird_id are already in the text.
_CONSOLE_CONTEXT = ("scale", "driver", "error_type", "duration_ms")

_configured = False


def _context(record: logging.LogRecord, fields=CONTEXT_FIELDS) -> Dict[str, Any]:
    return {key: getattr(record, key) for key in fields if hasattr(record, key)}


def _traceback(record: logging.LogRecord) -> str:
    return "".join(traceback.format_exception(*record.exc_info))


class JSONFormatter(logging.Formatter):
    """One JSON object per line, timestamped in UTC."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, timezone.utc)
        output: Dict[str, Any] = {
            "ts": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        output.update(_context(record))
        if record.exc_info:
            output["traceback"] = _traceback(record)
        return json.dumps(output, default=str)


class ConsoleFormatter(logging.Formatter):
    COLORS = {
        logging.DEBUG: "\033[2m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        level = f"{record.levelname:<7}"
        if self.use_color:
            level = f"{self.COLORS.get(record.levelno, '')}{level}{self.RESET}"
        where = record.name[len(NAMESPACE) + 1 :] if record.name.startswith(NAMESPACE + ".") else record.name
        line = f"{ts} {level} {where}: {record.getMessage()}"
        context = _context(record, _CONSOLE_CONTEXT)
        if context:
            line += "  " + " ".join(f"{k}={v}" for k, v in context.items())
        if record.exc_info:
            line += "\n" + _traceback(record).rstrip()
        return line


def resolve_level(level: Optional[str] = None) -> int:
    """Numeric level from an explicit name, CHIRPMAKER_DEBUG or CHIRPMAKER_LOG_LEVEL."""
    if level is None:
        if os.environ.get("CHIRPMAKER_DEBUG", "").strip().lower() in ("1", "true", "yes"):
            return logging.DEBUG
        level = os.environ.get("CHIRPMAKER_LOG_LEVEL", "INFO")
    value = getattr(logging, str(level).strip().upper(), None)
    return value if isinstance(value, int) else logging.INFO


def configure_logging(
    *,
    level: Optional[str] = None,
    json_file: Optional[str] = None,
    use_color: bool = True,
) -> None:
    """(Re)build the handlers of the ``chirpmaker`` logger tree.

    Args:
        level: DEBUG, INFO, WARNING or ERROR; see resolve_level() for the
               environment fallbacks.
        json_file: Optional path receiving JSON-lines records.
        use_color: Colourise console output (ignored when stderr is not a TTY).
    """
    global _configured

    numeric_level = resolve_level(level)
    logger = logging.getLogger(NAMESPACE)
    logger.setLevel(numeric_level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(ConsoleFormatter(use_color=use_color))
    logger.addHandler(console)

    if json_file:
        try:
            sink = logging.FileHandler(json_file, mode="a", encoding="utf-8")
        except OSError as exc:
            logger.warning("Cannot write JSON log %s: %s", json_file, exc)
        else:
            sink.setFormatter(JSONFormatter())
            logger.addHandler(sink)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Logger below the ``chirpmaker`` namespace; configures defaults on first use."""
    if not _configured:
        configure_logging()
    if name == "__main__":
        name = f"{NAMESPACE}.main"
    elif name != NAMESPACE and not name.startswith(NAMESPACE + "."):
        name = f"{NAMESPACE}.{name}"
    return logging.getLogger(name)


def log_exception(
    logger: logging.Logger,
    message: str,
    *,
    error_type: Optional[str] = None,
    **extra: Any,
) -> None:
    """Log the exception being handled together with its context fields."""
    if error_type:
        extra["error_type"] = error_type
    logger.exception(message, extra=extra)
