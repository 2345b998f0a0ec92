"""
Logging for the ``finhealth`` CLI.

Library modules only call ``logging.getLogger(__name__)``; the CLI calls
``configure_logging(config.logging)`` once per command.  Console output goes
to stderr because stdout carries the report (or ``--json`` payload).

Assessment log calls attach context through ``extra=`` (``profile``,
``overall``, ``n_recommendations``).  The plain format ignores it; the JSON
format (``json_format = true`` under ``[logging]``) lifts it to top-level
keys::

    {"ts": "2026-10-19T09:30:00Z", "level": "INFO", "logger": "finhealth.assessment",
     "msg": "Assessment for Alex: overall=77 ...", "profile": "Alex", "overall": 77}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Optional, TextIO

if TYPE_CHECKING:
    from finhealth.config import LoggingConfig

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Attributes every LogRecord carries; anything else came from ``extra=``.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class _JsonFormatter(logging.Formatter):
    """One JSON object per record: ``ts``, ``level``, ``logger``, ``msg``,
    ``exc`` when an exception is attached, plus any ``extra=`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
                LOG_DATE_FORMAT
            ),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        payload.update(extra_fields(record))
        return json.dumps(payload, default=str)


def extra_fields(record: logging.LogRecord) -> dict:
    """Fields passed through ``extra=`` on the logging call."""
    return {
        key: val
        for key, val in record.__dict__.items()
        if key not in _RESERVED_ATTRS and not key.startswith("_")
    }


def build_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return _JsonFormatter()
    return logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def configure_logging(
    config: "LoggingConfig",
    stream: Optional[TextIO] = None,
) -> None:
    """Replace the root logger's handlers according to ``config``.

    Args:
        config: ``[logging]`` section of ``AppConfig``.
        stream: Console stream; defaults to ``sys.stderr`` at call time.
    """
    level = getattr(logging, config.level.upper(), logging.INFO)
    formatter = build_formatter(config.json_format)

    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stderr)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
