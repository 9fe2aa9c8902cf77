"""
Logging setup for the GreatReads core.

Library modules only ever do ``logger = logging.getLogger(__name__)``. The CLI
calls ``configure_logging(config.logging)`` once per command; nothing inside
``greatreads.recommendations`` or ``greatreads.integrity`` touches handlers.

Every record passes through ``_ComponentFilter``, which tags it with the
subsystem it came from (``recommendations``, ``integrity``, ``ingestion``,
...) so moderation logs can be split from recommendation logs downstream.

Plain format::

    2026-02-24T15:00:00Z [INFO] integrity greatreads.integrity.summary: Re-evaluated 12 review(s); 1 tier change(s).

JSON format (``json_format = true`` under ``[logging]``), one object per line::

    {"ts": "...", "level": "INFO", "component": "integrity", "logger": "...", "msg": "..."}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from greatreads.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(component)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_PACKAGE = "greatreads"

# Keys present on every LogRecord; anything else arrived via ``extra=``.
_RESERVED = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "component"}


def component_for(logger_name: str) -> str:
    """Subsystem name for a logger: ``greatreads.integrity.trust`` -> ``integrity``.

    Loggers outside the package keep their top-level name.
    """
    parts = logger_name.split(".")
    if parts[0] == _PACKAGE and len(parts) > 1:
        return parts[1]
    return parts[0] or "root"


class _ComponentFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.component = component_for(record.name)
        return True


class _JsonFormatter(logging.Formatter):
    """One JSON object per record, ``extra=`` fields merged at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict = {
            "ts": created.strftime(LOG_DATE_FORMAT),
            "level": record.levelname,
            "component": getattr(record, "component", component_for(record.name)),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update(
            (key, val)
            for key, val in record.__dict__.items()
            if key not in _RESERVED and not key.startswith("_")
        )
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _attach(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(_ComponentFilter())
    return handler


def configure_logging(config: "LoggingConfig") -> None:
    """Install root handlers according to ``config``.

    Console output goes to stderr so that ``--json`` command output on stdout
    stays parseable. A file handler is added when ``config.log_file`` is set;
    its parent directory is created if missing. Calling this again replaces
    the previous handlers.

    Args:
        config: The ``[logging]`` section of ``AppConfig``.
    """
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    formatter: logging.Formatter = (
        _JsonFormatter() if config.json_format
        else logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    )

    handlers = [_attach(logging.StreamHandler(sys.stderr), level, formatter)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            _attach(logging.FileHandler(log_path, encoding="utf-8"), level, formatter)
        )

    logging.basicConfig(level=level, handlers=handlers, force=True)
