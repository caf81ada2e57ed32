"""String identifier primitives for ULID and UUID primary keys."""

from packages.variable_keys.ids.ulid import (
    ULID_LENGTH,
    MonotonicUlidGenerator,
    decode_ulid,
    encode_ulid,
    generate_ulid_str,
    is_ulid,
    ulid_timestamp_ms,
)
from packages.variable_keys.ids.uuids import UUID_LENGTH, generate_uuid_str, is_uuid

__all__ = [
    "MonotonicUlidGenerator",
    "ULID_LENGTH",
    "UUID_LENGTH",
    "decode_ulid",
    "encode_ulid",
    "generate_ulid_str",
    "generate_uuid_str",
    "is_ulid",
    "is_uuid",
    "ulid_timestamp_ms",
]
