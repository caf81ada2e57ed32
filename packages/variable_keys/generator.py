"""Primary key value generation for ULID/UUID keyed models and pivot rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Iterable, Mapping, TypeVar

from packages.variable_keys.enums import PrimaryKeyType
from packages.variable_keys.ids import generate_ulid_str, generate_uuid_str

TId = TypeVar("TId", bound=Hashable)


@dataclass(frozen=True, slots=True)
class PrimaryKeyValue:
    """A freshly generated key; ``value`` is ``None`` only for ``ID`` keys."""

    type: PrimaryKeyType
    value: str | None

    def __post_init__(self) -> None:
        """Validate that a value is present exactly when the type needs one."""
        if self.type is PrimaryKeyType.ID and self.value is not None:
            raise ValueError("auto-increment primary keys carry no generated value")
        if self.type is not PrimaryKeyType.ID and self.value is None:
            raise ValueError(f"{self.type.value} primary keys require a generated value")

    def is_auto_incrementing(self) -> bool:
        """Return whether the database assigns this key."""
        return self.type is PrimaryKeyType.ID

    def requires_value(self) -> bool:
        """Return whether the application must supply this key."""
        return not self.is_auto_incrementing()


def generate_primary_key(primary_key_type: PrimaryKeyType) -> PrimaryKeyValue:
    """Generate a key value for ``primary_key_type``.

    ULIDs are 26 lowercase Crockford Base32 characters and increase
    monotonically within the process. UUIDs are 36-char lowercase version-4
    strings, and ``ID`` keys carry no value.
    """
    if primary_key_type is PrimaryKeyType.ULID:
        value: str | None = generate_ulid_str()
    elif primary_key_type is PrimaryKeyType.UUID:
        value = generate_uuid_str()
    else:
        value = None
    return PrimaryKeyValue(type=primary_key_type, value=value)


def enrich_pivot_data(
    primary_key_type: PrimaryKeyType,
    data: Mapping[str, Any],
    *,
    key: str = "id",
) -> dict[str, Any]:
    """Return a copy of a pivot row with a generated key under ``key``.

    Rows for ``ID`` pivots and rows that already carry ``key`` are returned
    unchanged (as a copy).
    """
    enriched = dict(data)
    if key in enriched:
        return enriched

    generated = generate_primary_key(primary_key_type)
    if generated.requires_value():
        enriched[key] = generated.value
    return enriched


def enrich_pivot_data_for_ids(
    primary_key_type: PrimaryKeyType,
    ids: Iterable[TId],
    data: Mapping[str, Any],
    *,
    key: str = "id",
) -> dict[TId, dict[str, Any]]:
    """Return one independently enriched pivot row per related id.

    The result has the shape expected by bulk ``attach``/``sync`` style
    helpers: ``{related_id: row}``.
    """
    return {
        related_id: enrich_pivot_data(primary_key_type, data, key=key)
        for related_id in ids
    }
