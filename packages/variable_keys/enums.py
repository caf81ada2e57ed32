"""Closed key and morph kinds selectable per model."""

from __future__ import annotations

from enum import Enum


class PrimaryKeyType(str, Enum):
    """Storage strategy for a model's primary key.

    ``ID`` is a database-assigned auto-increment integer. ``ULID`` and ``UUID``
    are application-generated fixed-length strings.
    """

    ID = "id"
    ULID = "ulid"
    UUID = "uuid"


class MorphType(str, Enum):
    """Storage type of the ``{name}_id`` column in a polymorphic pair.

    ``STRING`` is the generic kind: it takes the storage of the configured
    default morph key type, which is ``NUMERIC`` unless set otherwise.
    """

    STRING = "string"
    NUMERIC = "numeric"
    UUID = "uuid"
    ULID = "ulid"
