"""Interface the dumpers use to introspect a schema."""

from __future__ import annotations

from typing import Any, Mapping, Protocol

from oradump.core.models import (
    Capability,
    Column,
    ForeignKeyDefinition,
    IndexDefinition,
    SynonymDefinition,
)


class SchemaConnection(Protocol):
    """
    Introspection surface of a database connection.

    Members tied to a :class:`Capability` are only called when the
    connection declares that capability in ``capabilities``.
    """

    capabilities: frozenset[Capability]

    def tables(self) -> list[str]:
        """Return all table names of the current schema."""
        ...

    def materialized_views(self) -> list[str]:
        """Return materialized view names (MATERIALIZED_VIEWS)."""
        ...

    def columns(self, table_name: str) -> list[Column]:
        """Return the columns of a table in definition order."""
        ...

    def indexes(self, table_name: str) -> list[IndexDefinition]:
        """Return the indexes of a table."""
        ...

    def foreign_keys(self, table_name: str) -> list[ForeignKeyDefinition]:
        """Return the foreign keys declared on a table (FOREIGN_KEYS)."""
        ...

    def pk_and_sequence_for(self, table_name: str) -> tuple[str, str | None] | None:
        """Return (primary key, sequence) for a table (PK_AND_SEQUENCE)."""
        ...

    def primary_key(self, table_name: str) -> str | None:
        """Return the single-column primary key of a table (PRIMARY_KEY)."""
        ...

    def temporary_table(self, table_name: str) -> bool:
        """Return True for global temporary tables."""
        ...

    def table_comment(self, table_name: str) -> str | None:
        """Return the table comment, if any."""
        ...

    def has_primary_key_trigger(self, table_name: str) -> bool:
        """Return True if a trigger fills the primary key (PRIMARY_KEY_TRIGGERS)."""
        ...

    def synonyms(self) -> list[SynonymDefinition]:
        """Return the synonyms of the current schema (SYNONYMS)."""
        ...

    def native_database_types(self) -> Mapping[str, Mapping[str, Any]]:
        """Return the type table: abstract type -> type options (``name``, ``limit``)."""
        ...

    def migration_keys(self) -> list[str]:
        """Return the canonical, ordered list of column attribute keys."""
        ...

    def column_spec(
        self, column: Column, types: Mapping[str, Mapping[str, Any]]
    ) -> dict[str, str]:
        """Render a column into ``type`` plus rendered migration attributes."""
        ...

    def schema_version(self) -> str | None:
        """Return the latest applied migration version, if known."""
        ...
