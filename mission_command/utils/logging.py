"""
Root-logger setup for the CLI.

``configure_logging(config, debug=...)`` runs once per command, before any
work. Library modules only ever call ``logging.getLogger(__name__)``.

Records go to stderr so that stdout carries nothing but command output
(``environment --json`` pipes cleanly), and optionally to a log file.
With ``json_format = true`` each record is one JSON object::

    {"ts": "2026-10-19T15:00:00.123Z", "level": "INFO",
     "logger": "mission_command.telemetry.environment", "msg": "...",
     "ticker": "RKLB"}

Keys passed through ``extra=`` are copied to the top level.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mission_command.config import LoggingConfig

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Loggers that are chatty at INFO and never useful to a CLI user
_QUIET_LOGGERS = ("asyncio",)

# Every attribute a bare LogRecord has; anything beyond these came from ``extra=``
_STANDARD_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


class _JsonLineFormatter(logging.Formatter):
    """Render a record as a single JSON line, extras included."""

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, object] = {
            "ts": stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        entry.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_")
        )
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


def _make_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return _JsonLineFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)


def configure_logging(config: "LoggingConfig", debug: bool = False) -> None:
    """Install stderr (and optional file) handlers on the root logger.

    Args:
        config: ``[logging]`` section of the app config. An empty
            ``log_file`` skips the file handler.
        debug: Force DEBUG regardless of ``config.level``.
    """
    level = logging.DEBUG if debug else logging.getLevelName(config.level)
    formatter = _make_formatter(config.json_format)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
