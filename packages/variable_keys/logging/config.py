"""Stdout logging setup for applications using variable keys.

The library only obtains loggers through ``get_logger``. Handlers are
installed by ``configure_logging`` when the host application asks for them,
typically through ``bootstrap``.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Mapping

from . import fields
from .context import get_context


class ContextFilter(logging.Filter):
    """Stamp records with the service fields and active ``log_context``."""

    def __init__(self, static_fields: Mapping[str, str]) -> None:
        super().__init__()
        self._static_fields = dict(static_fields)

    def filter(self, record: logging.LogRecord) -> bool:
        record.context = {**self._static_fields, **get_context()}
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line; context fields sit beside the core ones."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            fields.TIMESTAMP: datetime.fromtimestamp(record.created, UTC).isoformat(),
            fields.LEVEL: record.levelname,
            fields.LOGGER: record.name,
            fields.MESSAGE: record.getMessage(),
            **getattr(record, "context", {}),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, separators=(",", ":"))


class PlainFormatter(logging.Formatter):
    """Single-line text output followed by sorted ``key=value`` context."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        context = getattr(record, "context", {})
        pairs = [f"{key}={context[key]}" for key in sorted(context)]
        return " ".join([super().format(record), *pairs])


def configure_logging(
    *,
    level: str = "INFO",
    json_output: bool = True,
    service: str | None = None,
    environment: str | None = None,
) -> None:
    """Replace the root handlers with one stdout handler at ``level``.

    ``service`` and ``environment``, when given, are added to every record.
    """
    static_fields = {
        key: value
        for key, value in ((fields.SERVICE, service), (fields.ENVIRONMENT, environment))
        if value
    }
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.addFilter(ContextFilter(static_fields))
    handler.setFormatter(JsonFormatter() if json_output else PlainFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger from the standard logging hierarchy."""
    return logging.getLogger(name)
