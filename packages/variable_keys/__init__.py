"""Variable primary, foreign and polymorphic keys for SQLAlchemy models.

Pick a key strategy per model (auto-increment integer, ULID or UUID), record
it in a ``VariableKeysRegistry`` and let the schema helpers and
``PrimaryKeyLifecycle`` dispatch on it.
"""

from packages.variable_keys.bootstrap import bootstrap
from packages.variable_keys.enums import MorphType, PrimaryKeyType
from packages.variable_keys.errors import (
    CannotAssignNonStringToUlidError,
    CannotAssignNonStringToUuidError,
    ModelNotRegisteredError,
)
from packages.variable_keys.generator import (
    PrimaryKeyValue,
    enrich_pivot_data,
    enrich_pivot_data_for_ids,
    generate_primary_key,
)
from packages.variable_keys.lifecycle import PrimaryKeyLifecycle
from packages.variable_keys.registry import (
    ModelKeyMapping,
    VariableKeysRegistry,
    model_identifier,
)
from packages.variable_keys.schema import (
    resolve_morph_type,
    variable_foreign_key,
    variable_key_type,
    variable_morph_key_type,
    variable_morphs,
    variable_primary_key,
)

__all__ = [
    "CannotAssignNonStringToUlidError",
    "CannotAssignNonStringToUuidError",
    "ModelKeyMapping",
    "ModelNotRegisteredError",
    "MorphType",
    "PrimaryKeyLifecycle",
    "PrimaryKeyType",
    "PrimaryKeyValue",
    "VariableKeysRegistry",
    "bootstrap",
    "enrich_pivot_data",
    "enrich_pivot_data_for_ids",
    "generate_primary_key",
    "model_identifier",
    "resolve_morph_type",
    "variable_foreign_key",
    "variable_key_type",
    "variable_morph_key_type",
    "variable_morphs",
    "variable_primary_key",
]
