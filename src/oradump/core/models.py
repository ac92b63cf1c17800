"""Core schema models used by the dumpers.

These models represent introspected schema objects in a simple, immutable
form. They are free of driver types and of CLI concerns so the dumpers can
be exercised with hand-built connections in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Capability(str, Enum):
    """
    Optional features a connection may declare.

    Values:
        MATERIALIZED_VIEWS: Can list materialized views (marks an Oracle connection).
        SYNONYMS: Can list synonyms of the current schema.
        PRIMARY_KEY_TRIGGERS: Can tell whether a table has a primary key trigger.
        PK_AND_SEQUENCE: Can resolve primary key and sequence together.
        PRIMARY_KEY: Can resolve a single-column primary key.
        DOMAIN_INDEXES: Reports domain index types (e.g. CTXSYS.CONTEXT).
        FOREIGN_KEYS: Can list foreign keys of a table.
    """

    MATERIALIZED_VIEWS = "MATERIALIZED_VIEWS"
    SYNONYMS = "SYNONYMS"
    PRIMARY_KEY_TRIGGERS = "PRIMARY_KEY_TRIGGERS"
    PK_AND_SEQUENCE = "PK_AND_SEQUENCE"
    PRIMARY_KEY = "PRIMARY_KEY"
    DOMAIN_INDEXES = "DOMAIN_INDEXES"
    FOREIGN_KEYS = "FOREIGN_KEYS"


@dataclass(frozen=True)
class Column:
    """
    A table column as reported by the connection.

    Attributes:
        name: Column name (display form).
        sql_type: Raw SQL type, e.g. ``VARCHAR2(100)``.
        type: Abstract migration type (``string``, ``integer``...) or None
              when the SQL type has no mapping.
        null: Whether the column accepts NULL.
        default: Raw default expression, if any.
    """

    name: str
    sql_type: str
    type: str | None = None
    null: bool = True
    default: str | None = None
    limit: int | None = None
    precision: int | None = None
    scale: int | None = None
    comment: str | None = None


@dataclass(frozen=True)
class Table:
    """Lightweight representation of a table about to be dumped."""

    name: str
    columns: tuple[Column, ...] = ()
    primary_key: str | None = None
    comment: str | None = None
    temporary: bool = False
    primary_key_trigger: bool = False

    @property
    def has_primary_key(self) -> bool:
        """True if one of the columns carries the resolved primary key name."""
        return any(c.name == self.primary_key for c in self.columns)


@dataclass(frozen=True)
class IndexDefinition:
    """
    An index of a table.

    ``type`` is None for plain B-tree indexes and the indextype name
    (``CTXSYS.CONTEXT``) for domain indexes.
    """

    table: str
    name: str
    columns: tuple[str, ...] = ()
    unique: bool = False
    type: str | None = None
    tablespace: str | None = None
    statement_parameters: str | None = None


@dataclass(frozen=True)
class SynonymDefinition:
    """A synonym pointing at a table, possibly in another schema or over a db link."""

    name: str
    table_name: str
    table_owner: str | None = None
    db_link: str | None = None

    @property
    def target(self) -> str:
        """Fully qualified target: ``owner.table@link`` with optional parts."""
        target = self.table_name
        if self.table_owner:
            target = f"{self.table_owner}.{target}"
        if self.db_link:
            target = f"{target}@{self.db_link}"
        return target


@dataclass(frozen=True)
class ForeignKeyDefinition:
    """A single-column foreign key constraint."""

    from_table: str
    to_table: str
    column: str
    primary_key: str = "id"
    name: str | None = None
    on_delete: str | None = None


@dataclass(frozen=True)
class DumpOptions:
    """
    Caller-supplied settings of a dump run.

    Attributes:
        ignore_tables: Literal names (``str``) and/or compiled patterns.
        table_name_prefix: Prefix stripped from table names before display/matching.
        table_name_suffix: Suffix stripped from table names before display/matching.
    """

    ignore_tables: tuple[object, ...] = field(default_factory=tuple)
    table_name_prefix: str = ""
    table_name_suffix: str = ""
