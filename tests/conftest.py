from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

from oradump.core.models import Capability  # noqa: E402
from oradump.core.naming import quote  # noqa: E402


class StubConnection:
    """In-memory connection; every lookup reads from plain dicts."""

    def __init__(
        self,
        *,
        capabilities=frozenset(Capability),
        tables=None,
        materialized_views=(),
        columns=None,
        primary_keys=None,
        indexes=None,
        foreign_keys=None,
        comments=None,
        temporary=(),
        triggers=(),
        synonyms=(),
        version=None,
    ):
        self.capabilities = frozenset(capabilities)
        self._tables = list(tables if tables is not None else (columns or {}))
        self._materialized_views = list(materialized_views)
        self._columns = columns or {}
        self._primary_keys = primary_keys or {}
        self._indexes = indexes or {}
        self._foreign_keys = foreign_keys or {}
        self._comments = comments or {}
        self._temporary = set(temporary)
        self._triggers = set(triggers)
        self._synonyms = list(synonyms)
        self._version = version

    def tables(self):
        return list(self._tables)

    def materialized_views(self):
        return list(self._materialized_views)

    def columns(self, table_name):
        return list(self._columns.get(table_name, []))

    def indexes(self, table_name):
        return list(self._indexes.get(table_name, []))

    def foreign_keys(self, table_name):
        return list(self._foreign_keys.get(table_name, []))

    def pk_and_sequence_for(self, table_name):
        pk = self.primary_key(table_name)
        return (pk, f"{table_name}_seq") if pk else None

    def primary_key(self, table_name):
        return self._primary_keys.get(table_name, "id")

    def temporary_table(self, table_name):
        return table_name in self._temporary

    def table_comment(self, table_name):
        return self._comments.get(table_name)

    def has_primary_key_trigger(self, table_name):
        return table_name in self._triggers

    def synonyms(self):
        return list(self._synonyms)

    def native_database_types(self):
        return {"primary_key": {}, "string": {"limit": 255}, "integer": {}, "text": {}}

    def migration_keys(self):
        return ["name", "limit", "precision", "scale", "default", "null"]

    def column_spec(self, column, types):
        spec = {"name": quote(column.name), "type": column.type}
        if column.limit is not None:
            spec["limit"] = f"limit: {column.limit}"
        if column.default is not None:
            spec["default"] = f"default: {quote(column.default)}"
        if not column.null:
            spec["null"] = "null: false"
        return spec

    def schema_version(self):
        return self._version


@pytest.fixture
def make_connection():
    """Factory for :class:`StubConnection` instances."""
    return StubConnection
