"""Logging API for variable keys.

Thin wrapper over Python's ``logging`` module with stdout defaults and
structured context propagation.
"""

from .config import configure_logging, get_logger
from .context import get_context, log_context

__all__ = [
    "configure_logging",
    "get_context",
    "get_logger",
    "log_context",
]
