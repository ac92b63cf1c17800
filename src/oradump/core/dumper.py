"""Generic schema dumper.

Writes a schema as ``schema.rb`` text: a header, one ``create_table`` block
per table, the foreign keys, and a trailer. Dialect dumpers subclass
:class:`SchemaDumper` and override the passes they need.
"""

from __future__ import annotations

import io
import logging
import re
from typing import TextIO

from oradump.core.columns import format_column_rows
from oradump.core.connection import SchemaConnection
from oradump.core.models import (
    Capability,
    Column,
    DumpOptions,
    ForeignKeyDefinition,
    IndexDefinition,
)
from oradump.core.naming import NamingConfig, quote
from oradump.core.selectors import TableFilter

logger = logging.getLogger(__name__)

DEFAULT_PRIMARY_KEY = "id"

_HEADER = """\
# This file is auto-generated from the current state of the database. Instead
# of editing this file, please use the migrations feature of Active Record to
# incrementally modify your database, and then regenerate this schema definition.
#
# Note that this schema.rb definition is the authoritative source for your
# database schema. If you need to create the application database on another
# system, you should be using db:schema:load, not running all the migrations
# from scratch. The latter is a flawed and unsustainable approach (the more migrations
# you'll amass, the slower it'll run and the greater likelihood for issues).
#
# It's strongly recommended that you check this file into your version control system.

"""

_GENERATED_FK_NAME = re.compile(r"^fk_rails_[0-9a-f]{10}$")


class UnknownColumnTypeError(RuntimeError):
    """Raised when the connection cannot render a column's SQL type."""

    def __init__(self, column: Column):
        super().__init__(f"Unknown type '{column.sql_type}' for column '{column.name}'")
        self.column = column


class SchemaDumper:
    """Dumps any connection that implements the generic introspection surface."""

    def __init__(self, connection: SchemaConnection, options: DumpOptions | None = None):
        options = options or DumpOptions()
        self.connection = connection
        self.capabilities = frozenset(getattr(connection, "capabilities", ()))
        self.naming = NamingConfig(options.table_name_prefix, options.table_name_suffix)
        # Built eagerly so a malformed ignore list fails before any output.
        self.filter = TableFilter(options.ignore_tables, self.naming)
        self.types = connection.native_database_types()

    def dump(self, stream: TextIO) -> TextIO:
        """Write the whole schema to ``stream`` and return it."""
        self.header(stream)
        self.tables(stream)
        self.trailer(stream)
        return stream

    def header(self, stream: TextIO) -> None:
        stream.write(_HEADER)
        version = self.connection.schema_version()
        define_params = f"version: {version}" if version else ""
        stream.write(f"ActiveRecord::Schema.define({define_params}) do\n\n")

    def trailer(self, stream: TextIO) -> None:
        stream.write("end\n")

    def table_names(self) -> list[str]:
        """Return the sorted, filtered table names to dump."""
        return self.filter.select(self.connection.tables())

    def tables(self, stream: TextIO) -> None:
        """Dump every table body, then the foreign keys of every table."""
        names = self.table_names()
        for name in names:
            self.table(name, stream)
        self.foreign_key_pass(names, stream)

    def foreign_key_pass(self, names: list[str], stream: TextIO) -> None:
        """Write foreign keys after all tables exist."""
        if Capability.FOREIGN_KEYS not in self.capabilities:
            return
        written = False
        for name in names:
            written = self.foreign_keys(name, stream) or written
        if written:
            stream.write("\n")

    def table(self, table_name: str, stream: TextIO) -> None:
        """Dump one table; a failing table becomes a comment block."""
        buffer = io.StringIO()
        try:
            self.table_body(table_name, buffer)
        except Exception as e:  # noqa: BLE001 - one broken table must not stop the dump
            logger.warning("Could not dump table %s: %s", table_name, e)
            stream.write(
                f"# Could not dump table {self.naming.display(table_name)} "
                f"because of following {type(e).__name__}\n"
            )
            stream.write(f"#   {e}\n")
            stream.write("\n")
            return
        stream.write(buffer.getvalue())

    def resolve_primary_key(self, table_name: str) -> str | None:
        """Prefer the key/sequence lookup, fall back to the primary key lookup."""
        if Capability.PK_AND_SEQUENCE in self.capabilities:
            pk_and_sequence = self.connection.pk_and_sequence_for(table_name)
            return pk_and_sequence[0] if pk_and_sequence else None
        if Capability.PRIMARY_KEY in self.capabilities:
            return self.connection.primary_key(table_name)
        return None

    def table_body(self, table_name: str, stream: TextIO) -> None:
        columns = self.connection.columns(table_name)
        pk = self.resolve_primary_key(table_name)

        options = []
        if any(c.name == pk for c in columns):
            if pk != DEFAULT_PRIMARY_KEY:
                options.append(f"primary_key: {quote(pk)}")
        else:
            options.append("id: false")
        options.append("force: :cascade")
        stream.write(
            f"  create_table {self.naming.display(table_name)}, "
            f"{', '.join(options)} do |t|\n"
        )
        self.column_lines(columns, pk, stream)
        stream.write("  end\n\n")
        self.indexes(table_name, stream)

    def column_lines(self, columns: list[Column], pk: str | None, stream: TextIO) -> None:
        """Write aligned column lines, skipping the primary key column."""
        specs = []
        for column in columns:
            if column.type is None or column.type not in self.types:
                raise UnknownColumnTypeError(column)
            if column.name == pk:
                continue
            specs.append(self.connection.column_spec(column, self.types))
        for row in format_column_rows(specs, self.connection.migration_keys()):
            stream.write(row + "\n")

    def indexes(self, table_name: str, stream: TextIO) -> None:
        indexes = self.connection.indexes(table_name)
        if not indexes:
            return
        statements = [self.index_statement(table_name, index) for index in indexes]
        stream.write("\n".join(sorted(statements)) + "\n")
        stream.write("\n")

    def index_statement(self, table_name: str, index: IndexDefinition) -> str:
        parts = [
            f"add_index {self.naming.display(table_name)}",
            quote(index.columns),
            f"name: {quote(index.name)}",
        ]
        if index.unique:
            parts.append("unique: true")
        if index.type:
            parts.append(f"type: {quote(index.type)}")
        return "  " + ", ".join(parts)

    def foreign_keys(self, table_name: str, stream: TextIO) -> bool:
        """Write the table's foreign keys; return True if any were written."""
        foreign_keys = self.connection.foreign_keys(table_name)
        if not foreign_keys:
            return False
        statements = [self.foreign_key_statement(fk) for fk in foreign_keys]
        stream.write("\n".join(sorted(statements)) + "\n")
        return True

    def foreign_key_statement(self, fk: ForeignKeyDefinition) -> str:
        parts = [
            f"add_foreign_key {self.naming.display(fk.from_table)}",
            self.naming.display(fk.to_table),
        ]
        if fk.column != foreign_key_column_for(self.naming.strip(fk.to_table)):
            parts.append(f"column: {quote(fk.column)}")
        if fk.primary_key != DEFAULT_PRIMARY_KEY:
            parts.append(f"primary_key: {quote(fk.primary_key)}")
        if fk.name and not _GENERATED_FK_NAME.match(fk.name):
            parts.append(f"name: {quote(fk.name)}")
        if fk.on_delete:
            parts.append(f"on_delete: :{fk.on_delete}")
        return "  " + ", ".join(parts)


def foreign_key_column_for(table_name: str) -> str:
    """Conventional foreign key column for a referenced table (``users`` -> ``user_id``)."""
    singular = table_name
    if singular.endswith("ies"):
        singular = singular[:-3] + "y"
    elif singular.endswith("s") and not singular.endswith("ss"):
        singular = singular[:-1]
    return f"{singular}_id"
