"""Model-to-key-type registry.

Applications construct one ``VariableKeysRegistry`` during bootstrap, map each
model to its primary key and morph types, and pass the registry to whatever
needs to resolve them (schema helpers, ``PrimaryKeyLifecycle``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Mapping, TypeAlias

from packages.variable_keys.enums import MorphType, PrimaryKeyType
from packages.variable_keys.errors import ModelNotRegisteredError
from packages.variable_keys.logging import fields, get_logger, log_context

ModelRef: TypeAlias = "type | str | object"

_LOGGER = get_logger(__name__)


def model_identifier(model: ModelRef) -> str:
    """Return the registry key for a model class, instance or identifier."""
    if isinstance(model, str):
        return model
    cls = model if isinstance(model, type) else type(model)
    return f"{cls.__module__}.{cls.__qualname__}"


@dataclass(frozen=True, slots=True)
class ModelKeyMapping:
    """Configured key kinds for one model; either field may be absent."""

    primary_key_type: PrimaryKeyType | None = None
    morph_type: MorphType | None = None

    @classmethod
    def from_config(cls, config: ModelKeyMapping | Mapping[str, Any]) -> ModelKeyMapping:
        """Build a mapping from a config dict, coercing enum string values."""
        if isinstance(config, ModelKeyMapping):
            return config
        primary_key_type = config.get("primary_key_type")
        morph_type = config.get("morph_type")
        return cls(
            primary_key_type=(
                None if primary_key_type is None else PrimaryKeyType(primary_key_type)
            ),
            morph_type=None if morph_type is None else MorphType(morph_type),
        )


@dataclass(slots=True)
class VariableKeysRegistry:
    """In-memory mapping from model identifier to configured key kinds.

    ``default_morph_type`` is the concrete kind that ``MorphType.STRING``
    morphs resolve to when their columns are built.
    """

    default_morph_type: MorphType = MorphType.NUMERIC
    _mappings: dict[str, ModelKeyMapping] = field(default_factory=dict)
    _lock: RLock = field(default_factory=RLock)

    def __post_init__(self) -> None:
        """Reject a generic default, which would never resolve to a column."""
        if self.default_morph_type is MorphType.STRING:
            raise ValueError("default morph type must be numeric, uuid or ulid")

    def map(
        self, mappings: Mapping[ModelRef, ModelKeyMapping | Mapping[str, Any]]
    ) -> None:
        """Merge model mappings; an existing entry for a model is replaced."""
        normalized = {
            model_identifier(model): ModelKeyMapping.from_config(config)
            for model, config in mappings.items()
        }
        with self._lock:
            self._mappings.update(normalized)
        for model, mapping in normalized.items():
            with log_context(
                {
                    fields.MODEL: model,
                    fields.PRIMARY_KEY_TYPE: _value(mapping.primary_key_type),
                    fields.MORPH_TYPE: _value(mapping.morph_type),
                }
            ):
                _LOGGER.debug("Model key types registered")

    def get_primary_key_type(self, model: ModelRef) -> PrimaryKeyType:
        """Return the model's primary key type or raise if none is registered."""
        identifier = model_identifier(model)
        mapping = self._get(identifier)
        if mapping is None or mapping.primary_key_type is None:
            raise ModelNotRegisteredError(identifier, "primary_key_type")
        return mapping.primary_key_type

    def get_morph_type(self, model: ModelRef) -> MorphType:
        """Return the model's morph type or raise if none is registered."""
        identifier = model_identifier(model)
        mapping = self._get(identifier)
        if mapping is None or mapping.morph_type is None:
            raise ModelNotRegisteredError(identifier, "morph_type")
        return mapping.morph_type

    def is_registered(self, model: ModelRef) -> bool:
        """Return whether any entry, partial or full, exists for the model."""
        return self._get(model_identifier(model)) is not None

    def registered_models(self) -> tuple[str, ...]:
        """Return registered model identifiers sorted by name."""
        with self._lock:
            return tuple(sorted(self._mappings))

    def clear(self) -> None:
        """Remove every registered mapping."""
        with self._lock:
            self._mappings.clear()
        _LOGGER.debug("Model key registry cleared")

    def _get(self, identifier: str) -> ModelKeyMapping | None:
        """Return the mapping for ``identifier`` under the registry lock."""
        with self._lock:
            return self._mappings.get(identifier)


def _value(kind: PrimaryKeyType | MorphType | None) -> str | None:
    """Return an enum's value for log fields, passing ``None`` through."""
    return None if kind is None else kind.value
