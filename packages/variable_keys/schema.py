"""SQLAlchemy column helpers for variable primary, foreign and morph keys.

Each helper returns ordinary SQLAlchemy schema items, so the same call works
in ``Table(...)`` definitions and in Alembic ``op.create_table(...)``::

    op.create_table(
        "posts",
        variable_primary_key(PrimaryKeyType.ULID),
        variable_foreign_key(
            "author_id",
            registry.get_primary_key_type(User),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
        ),
        *variable_morphs("subject", MorphType.UUID, nullable=True, table_name="posts"),
    )
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import CHAR, BigInteger, Column, Index, Integer, String
from sqlalchemy.sql.schema import SchemaItem
from sqlalchemy.types import TypeEngine

from packages.variable_keys.enums import MorphType, PrimaryKeyType
from packages.variable_keys.ids import ULID_LENGTH, UUID_LENGTH

MORPH_TYPE_LENGTH = 255


def _big_integer() -> TypeEngine[int]:
    """Return ``BIGINT``, narrowed to ``INTEGER`` on SQLite."""
    # SQLite only autoincrements INTEGER PRIMARY KEY (rowid alias) columns.
    return BigInteger().with_variant(Integer(), "sqlite")


def variable_key_type(primary_key_type: PrimaryKeyType) -> TypeEngine[Any]:
    """Return the column type storing keys of ``primary_key_type``."""
    if primary_key_type is PrimaryKeyType.ULID:
        return CHAR(ULID_LENGTH)
    if primary_key_type is PrimaryKeyType.UUID:
        return CHAR(UUID_LENGTH)
    return _big_integer()


def resolve_morph_type(
    morph_type: MorphType, default_morph_type: MorphType = MorphType.NUMERIC
) -> MorphType:
    """Return the concrete morph kind, resolving ``STRING`` to the default.

    ``default_morph_type`` plays the role of an application-wide default
    morph key type and must itself be concrete.
    """
    if default_morph_type is MorphType.STRING:
        raise ValueError("default morph type must be numeric, uuid or ulid")
    if morph_type is MorphType.STRING:
        return default_morph_type
    return morph_type


def variable_morph_key_type(
    morph_type: MorphType, default_morph_type: MorphType = MorphType.NUMERIC
) -> TypeEngine[Any]:
    """Return the column type of a morph pair's ``_id`` column."""
    morph_type = resolve_morph_type(morph_type, default_morph_type)
    if morph_type is MorphType.ULID:
        return CHAR(ULID_LENGTH)
    if morph_type is MorphType.UUID:
        return CHAR(UUID_LENGTH)
    return _big_integer()


def variable_primary_key(
    primary_key_type: PrimaryKeyType, column: str = "id"
) -> Column[Any]:
    """Return a primary key column for the given key type.

    ``ID`` yields an auto-incrementing big integer; ``ULID`` and ``UUID``
    yield fixed-length string keys populated by the application.
    """
    if primary_key_type is PrimaryKeyType.ID:
        return Column(
            column,
            variable_key_type(primary_key_type),
            primary_key=True,
            autoincrement=True,
        )
    return Column(
        column,
        variable_key_type(primary_key_type),
        primary_key=True,
        nullable=False,
        autoincrement=False,
    )


def variable_foreign_key(
    column: str,
    primary_key_type: PrimaryKeyType,
    *args: SchemaItem,
    **kwargs: Any,
) -> Column[Any]:
    """Return a foreign key column typed to match the referenced key.

    Extra positional schema items (typically ``ForeignKey``) and keyword
    arguments such as ``nullable`` or ``index`` are passed through to
    ``Column``. The column is non-nullable unless ``nullable`` is given.
    """
    kwargs.setdefault("nullable", False)
    return Column(column, variable_key_type(primary_key_type), *args, **kwargs)


def variable_morphs(
    name: str,
    morph_type: MorphType,
    nullable: bool = False,
    *,
    table_name: str | None = None,
    index: bool = True,
    default_morph_type: MorphType = MorphType.NUMERIC,
) -> tuple[SchemaItem, ...]:
    """Return ``{name}_type``/``{name}_id`` columns for a polymorphic reference.

    ``MorphType.STRING`` takes the ``_id`` storage of ``default_morph_type``.
    A composite index over both columns is included unless ``index`` is
    false. Unpack the result into a table definition.
    """
    type_column = f"{name}_type"
    id_column = f"{name}_id"
    items: list[SchemaItem] = [
        Column(type_column, String(MORPH_TYPE_LENGTH), nullable=nullable),
        Column(
            id_column,
            variable_morph_key_type(morph_type, default_morph_type),
            nullable=nullable,
        ),
    ]
    if index:
        items.append(Index(morph_index_name(name, table_name), type_column, id_column))
    return tuple(items)


def morph_index_name(name: str, table_name: str | None = None) -> str:
    """Return the composite index name used by ``variable_morphs``."""
    base = f"{name}_type_{name}_id_index"
    return f"{table_name}_{base}" if table_name else base
