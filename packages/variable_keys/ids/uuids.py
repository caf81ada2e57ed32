"""UUID generation helpers for string primary keys."""

from __future__ import annotations

import re
import uuid

_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

UUID_LENGTH = 36


def generate_uuid_str() -> str:
    """Generate a random version-4 UUID in 36-char lowercase form."""
    return str(uuid.uuid4()).lower()


def is_uuid(value: object) -> bool:
    """Return whether ``value`` is a hyphenated UUID string."""
    return isinstance(value, str) and _UUID_RE.fullmatch(value) is not None
