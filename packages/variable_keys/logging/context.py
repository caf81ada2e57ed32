"""Scoped structured-logging fields held in a context variable."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Mapping

_LOG_FIELDS: ContextVar[dict[str, str]] = ContextVar(
    "variable_keys_log_fields", default={}
)


def get_context() -> dict[str, str]:
    """Return the fields bound by the enclosing ``log_context`` blocks."""
    return dict(_LOG_FIELDS.get())


@contextmanager
def log_context(values: Mapping[str, object]) -> Iterator[None]:
    """Attach ``values`` to every record logged inside the block.

    ``None`` values are skipped and the rest are stringified. Nested blocks
    extend the outer fields and restore them on exit.
    """
    bound = {key: str(value) for key, value in values.items() if value is not None}
    token = _LOG_FIELDS.set({**_LOG_FIELDS.get(), **bound})
    try:
        yield
    finally:
        _LOG_FIELDS.reset(token)
