"""Pre-insert primary key assignment for registry-configured models.

``PrimaryKeyLifecycle.prepare_for_insert`` is the explicit creation step:
call it on a new entity before persisting it, or bind it to SQLAlchemy's
``before_insert`` mapper event with ``listen``. Decision table for a model's
registered primary key type:

- ``ID``: nothing to do, the database assigns the key.
- ``ULID``/``UUID`` with no (falsy) value: generate one and assign it.
- ``ULID``/``UUID`` with a non-string value: raise.
- ``ULID``/``UUID`` with a string value: keep it.
"""

from __future__ import annotations

from typing import Any, Literal

from sqlalchemy import event, inspect
from sqlalchemy.engine import Connection
from sqlalchemy.orm import Mapper

from packages.variable_keys.enums import PrimaryKeyType
from packages.variable_keys.errors import (
    CannotAssignNonStringToUlidError,
    CannotAssignNonStringToUuidError,
)
from packages.variable_keys.generator import PrimaryKeyValue, generate_primary_key
from packages.variable_keys.logging import fields, get_logger, log_context
from packages.variable_keys.registry import ModelRef, VariableKeysRegistry, model_identifier

DEFAULT_KEY_NAME = "id"

_LOGGER = get_logger(__name__)


class PrimaryKeyLifecycle:
    """Resolve key metadata and assign keys for models in one registry."""

    def __init__(self, registry: VariableKeysRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> VariableKeysRegistry:
        """Return the registry this lifecycle resolves key types from."""
        return self._registry

    def key_name(self, model: ModelRef) -> str:
        """Return the primary key attribute name of a model.

        Mapped classes with a single-column primary key report that column's
        attribute; everything else falls back to ``id``.
        """
        if isinstance(model, str):
            return DEFAULT_KEY_NAME
        cls = model if isinstance(model, type) else type(model)
        mapper = inspect(cls, raiseerr=False)
        if isinstance(mapper, Mapper) and len(mapper.primary_key) == 1:
            return mapper.get_property_by_column(mapper.primary_key[0]).key
        return DEFAULT_KEY_NAME

    def unique_ids(self, model: ModelRef) -> list[str]:
        """Return the attributes that receive application-generated ids."""
        primary_key_type = self._registry.get_primary_key_type(model)
        if primary_key_type is PrimaryKeyType.ID:
            return []
        return [self.key_name(model)]

    def is_incrementing(self, model: ModelRef) -> bool:
        """Return whether the model's primary key is database-incremented."""
        return self.key_name(model) not in self.unique_ids(model)

    def key_type(self, model: ModelRef) -> Literal["int", "string"]:
        """Return the Python-side type family of the model's primary key."""
        return "string" if self.key_name(model) in self.unique_ids(model) else "int"

    def new_unique_id(self, model: ModelRef) -> str | None:
        """Generate a fresh key for the model, or ``None`` for ``ID`` keys."""
        return generate_primary_key(self._registry.get_primary_key_type(model)).value

    def prepare_for_insert(self, entity: object) -> PrimaryKeyValue:
        """Assign or validate the primary key of a new entity.

        A falsy key (``None``, ``""``, ``0``, ``False``) counts as unset and is
        replaced with a generated one. Any other non-string value raises; a
        non-empty string, ``"0"`` included, is kept as given.

        Returns the key value the entity will be persisted with; ``value`` is
        ``None`` for auto-increment models.
        """
        primary_key_type = self._registry.get_primary_key_type(entity)
        if primary_key_type is PrimaryKeyType.ID:
            return generate_primary_key(primary_key_type)

        key_name = self.key_name(entity)
        existing = getattr(entity, key_name, None)
        if not existing:
            generated = generate_primary_key(primary_key_type)
            setattr(entity, key_name, generated.value)
            with log_context(
                {
                    fields.MODEL: model_identifier(entity),
                    fields.PRIMARY_KEY_TYPE: primary_key_type.value,
                }
            ):
                _LOGGER.debug("Primary key generated")
            return generated

        if not isinstance(existing, str):
            if primary_key_type is PrimaryKeyType.UUID:
                raise CannotAssignNonStringToUuidError(existing)
            raise CannotAssignNonStringToUlidError(existing)
        return PrimaryKeyValue(type=primary_key_type, value=existing)

    def listen(self, target: type) -> None:
        """Run ``prepare_for_insert`` before every ORM insert of ``target``.

        The listener propagates to subclasses, so binding it to a declarative
        base covers every model deriving from it.
        """
        event.listen(target, "before_insert", self._before_insert, propagate=True)
        _LOGGER.debug("Primary key listener bound to %s", model_identifier(target))

    def remove(self, target: type) -> None:
        """Unbind a listener previously installed with ``listen``."""
        event.remove(target, "before_insert", self._before_insert)

    def _before_insert(
        self, mapper: Mapper[Any], connection: Connection, target: object
    ) -> None:
        """Forward SQLAlchemy's ``before_insert`` event to ``prepare_for_insert``."""
        self.prepare_for_insert(target)
