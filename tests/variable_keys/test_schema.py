"""Tests for variable primary, foreign and morph column helpers."""

from __future__ import annotations

import pytest
import sqlalchemy as sa
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateTable

from packages.variable_keys import (
    MorphType,
    PrimaryKeyType,
    variable_foreign_key,
    variable_morph_key_type,
    variable_morphs,
    variable_primary_key,
)
from packages.variable_keys.schema import morph_index_name


def _postgres_ddl(table: sa.Table) -> str:
    return str(CreateTable(table).compile(dialect=postgresql.dialect()))


def test_auto_increment_primary_key_is_big_serial_on_postgres() -> None:
    """``ID`` keys compile to an auto-incrementing big integer."""
    table = sa.Table("roles", sa.MetaData(), variable_primary_key(PrimaryKeyType.ID))

    assert "id BIGSERIAL NOT NULL" in _postgres_ddl(table)
    assert table.c.id.primary_key
    assert table.autoincrement_column is table.c.id


@pytest.mark.parametrize(
    ("primary_key_type", "length"),
    [(PrimaryKeyType.ULID, 26), (PrimaryKeyType.UUID, 36)],
)
def test_string_primary_keys_are_fixed_length(
    primary_key_type: PrimaryKeyType, length: int
) -> None:
    """ULID/UUID keys are non-null fixed-length CHAR primary keys."""
    column = variable_primary_key(primary_key_type)
    table = sa.Table("roles", sa.MetaData(), column)

    assert isinstance(column.type, sa.CHAR)
    assert column.type.length == length
    assert column.primary_key
    assert not column.nullable
    assert table.autoincrement_column is None
    assert f"id CHAR({length}) NOT NULL" in _postgres_ddl(table)


def test_primary_key_column_name_is_configurable() -> None:
    """The key column may use a name other than ``id``."""
    assert variable_primary_key(PrimaryKeyType.ULID, "role_key").name == "role_key"


def test_auto_increment_primary_key_assigns_ids_on_sqlite() -> None:
    """Inserting without a key lets the database number the rows."""
    metadata = sa.MetaData()
    roles = sa.Table(
        "roles",
        metadata,
        variable_primary_key(PrimaryKeyType.ID),
        sa.Column("name", sa.String(50)),
    )
    engine = sa.create_engine("sqlite://")
    metadata.create_all(engine)

    with engine.begin() as connection:
        first = connection.execute(roles.insert().values(name="admin"))
        second = connection.execute(roles.insert().values(name="editor"))

    assert first.inserted_primary_key[0] == 1
    assert second.inserted_primary_key[0] == 2


@pytest.mark.parametrize(
    ("primary_key_type", "type_name"),
    [
        (PrimaryKeyType.ID, "BIGINT"),
        (PrimaryKeyType.ULID, "CHAR(26)"),
        (PrimaryKeyType.UUID, "CHAR(36)"),
    ],
)
def test_foreign_key_type_matches_referenced_key(
    primary_key_type: PrimaryKeyType, type_name: str
) -> None:
    """Foreign key columns use the same storage type as the referenced key."""
    metadata = sa.MetaData()
    sa.Table("roles", metadata, variable_primary_key(primary_key_type))
    users = sa.Table(
        "users",
        metadata,
        variable_primary_key(PrimaryKeyType.ID),
        variable_foreign_key(
            "role_id", primary_key_type, sa.ForeignKey("roles.id", ondelete="CASCADE")
        ),
    )

    ddl = _postgres_ddl(users)
    assert f"role_id {type_name} NOT NULL" in ddl
    assert "ON DELETE CASCADE" in ddl
    foreign_key = next(iter(users.c.role_id.foreign_keys))
    assert foreign_key.target_fullname == "roles.id"


def test_foreign_key_forwards_column_options() -> None:
    """Nullability and indexing are delegated to ``Column``."""
    column = variable_foreign_key("role_id", PrimaryKeyType.ULID, nullable=True, index=True)

    assert column.nullable
    assert column.index
    assert not column.foreign_keys


@pytest.mark.parametrize(
    ("morph_type", "expected"),
    [
        (MorphType.STRING, sa.BigInteger),
        (MorphType.NUMERIC, sa.BigInteger),
        (MorphType.UUID, sa.CHAR),
        (MorphType.ULID, sa.CHAR),
    ],
)
def test_morph_id_type_follows_morph_type(morph_type: MorphType, expected: type) -> None:
    """The ``_id`` column storage is selected by morph type."""
    assert isinstance(variable_morph_key_type(morph_type), expected)


def test_generic_morph_defaults_to_numeric_ids() -> None:
    """``STRING`` morphs take big-integer ids unless another default is given."""
    table = sa.Table(
        "activities",
        sa.MetaData(),
        variable_primary_key(PrimaryKeyType.ID),
        *variable_morphs("subject", MorphType.STRING, table_name="activities"),
    )

    ddl = _postgres_ddl(table)

    assert "subject_id BIGINT NOT NULL" in ddl
    assert "subject_type VARCHAR(255) NOT NULL" in ddl


@pytest.mark.parametrize(
    ("default_morph_type", "length"),
    [(MorphType.ULID, 26), (MorphType.UUID, 36)],
)
def test_generic_morph_follows_configured_default(
    default_morph_type: MorphType, length: int
) -> None:
    """An overridden default morph key type decides the ``STRING`` id storage."""
    _, id_column, _ = variable_morphs(
        "subject", MorphType.STRING, default_morph_type=default_morph_type
    )

    assert isinstance(id_column.type, sa.CHAR)
    assert id_column.type.length == length


def test_concrete_morph_ignores_default() -> None:
    """Explicit morph kinds never consult the default."""
    column_type = variable_morph_key_type(MorphType.NUMERIC, MorphType.UUID)

    assert isinstance(column_type, sa.BigInteger)


def test_generic_default_morph_type_is_rejected() -> None:
    """The default must name a concrete storage kind."""
    with pytest.raises(ValueError, match="default morph type"):
        variable_morph_key_type(MorphType.UUID, MorphType.STRING)


def test_variable_morphs_builds_type_and_id_pair() -> None:
    """Morphs add non-null ``_type``/``_id`` columns and a composite index."""
    table = sa.Table(
        "comments",
        sa.MetaData(),
        variable_primary_key(PrimaryKeyType.ID),
        *variable_morphs("commentable", MorphType.UUID, table_name="comments"),
    )

    assert not table.c.commentable_type.nullable
    assert not table.c.commentable_id.nullable
    assert table.c.commentable_id.type.length == 36
    (index,) = table.indexes
    assert index.name == "comments_commentable_type_commentable_id_index"
    assert [column.name for column in index.columns] == [
        "commentable_type",
        "commentable_id",
    ]


def test_nullable_morphs_make_both_columns_nullable() -> None:
    """``nullable`` applies to both columns of the pair."""
    type_column, id_column, _ = variable_morphs("subject", MorphType.ULID, nullable=True)

    assert type_column.nullable
    assert id_column.nullable
    assert id_column.type.length == 26


def test_morphs_without_index() -> None:
    """The composite index can be omitted."""
    items = variable_morphs("subject", MorphType.NUMERIC, index=False)

    assert [item.name for item in items] == ["subject_type", "subject_id"]


def test_morph_index_name_without_table() -> None:
    """Index names drop the table prefix when no table is given."""
    assert morph_index_name("subject") == "subject_type_subject_id_index"


def test_helpers_work_inside_alembic_create_table() -> None:
    """Helpers plug into Alembic operations like hand-written columns."""
    engine = sa.create_engine("sqlite://")

    with engine.begin() as connection:
        op = Operations(MigrationContext.configure(connection))
        op.create_table("roles", variable_primary_key(PrimaryKeyType.UUID))
        op.create_table(
            "posts",
            variable_primary_key(PrimaryKeyType.ULID),
            variable_foreign_key(
                "role_id",
                PrimaryKeyType.UUID,
                sa.ForeignKey("roles.id", ondelete="CASCADE"),
            ),
            *variable_morphs("subject", MorphType.STRING, nullable=True, table_name="posts"),
        )

        inspector = sa.inspect(connection)
        columns = {column["name"]: column for column in inspector.get_columns("posts")}
        indexes = {index["name"]: index for index in inspector.get_indexes("posts")}
        foreign_keys = inspector.get_foreign_keys("posts")

    assert set(columns) == {"id", "role_id", "subject_type", "subject_id"}
    assert not columns["role_id"]["nullable"]
    assert columns["subject_type"]["nullable"]
    assert columns["subject_id"]["nullable"]
    assert indexes["posts_subject_type_subject_id_index"]["column_names"] == [
        "subject_type",
        "subject_id",
    ]
    assert foreign_keys[0]["referred_table"] == "roles"
    assert foreign_keys[0]["constrained_columns"] == ["role_id"]
