"""Exceptions raised by registry lookups and primary key assignment."""

from __future__ import annotations


def _debug_type(value: object) -> str:
    """Return a short runtime type name for error messages."""
    if value is None:
        return "None"
    return type(value).__qualname__


class ModelNotRegisteredError(LookupError):
    """Raised when a model has no registered key or morph type.

    ``field`` names the lookup that failed (``primary_key_type`` or
    ``morph_type``). A missing model and a model registered without the
    requested field raise the same error.
    """

    def __init__(self, model: str, field: str | None = None) -> None:
        """Initialize the error with the unresolved model identifier."""
        super().__init__(
            f"Model [{model}] is not registered with variable keys. "
            "Call VariableKeysRegistry.map() during bootstrap to register this model."
        )
        self.model = model
        self.field = field


class CannotAssignNonStringKeyError(TypeError):
    """Base error for a pre-set primary key value that is not a string."""

    key_kind = "string"

    def __init__(self, value: object) -> None:
        """Initialize the error with the rejected value."""
        super().__init__(
            f"Cannot assign non-string value of type [{_debug_type(value)}] to "
            f"{self.key_kind} primary key. {self.key_kind} primary keys must be strings."
        )
        self.value = value


class CannotAssignNonStringToUlidError(CannotAssignNonStringKeyError):
    """Raised when a ULID-keyed model carries a non-string key value."""

    key_kind = "ULID"


class CannotAssignNonStringToUuidError(CannotAssignNonStringKeyError):
    """Raised when a UUID-keyed model carries a non-string key value."""

    key_kind = "UUID"
