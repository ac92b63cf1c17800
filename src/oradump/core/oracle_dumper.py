"""Oracle-aware schema dumper.

Extends the generic dumper with what a plain relational model cannot
express on Oracle: temporary tables, table comments, primary key triggers,
context (domain) indexes and synonyms. Materialized views are left out of
the dump; they are created separately after the schema is loaded.
"""

from __future__ import annotations

import logging
from typing import TextIO

from oradump.core.connection import SchemaConnection
from oradump.core.dumper import DEFAULT_PRIMARY_KEY, SchemaDumper
from oradump.core.models import Capability, DumpOptions, IndexDefinition, Table
from oradump.core.naming import quote

logger = logging.getLogger(__name__)

CONTEXT_INDEX_TYPE = "CTXSYS.CONTEXT"


class OracleSchemaDumper(SchemaDumper):
    """Dumper for connections that declare Oracle capabilities."""

    def table_names(self) -> list[str]:
        return self.filter.select(
            self.connection.tables(), excluded=self.connection.materialized_views()
        )

    def tables(self, stream: TextIO) -> None:
        super().tables(stream)
        self.synonyms(stream)

    def load_table(self, table_name: str) -> Table:
        """Collect everything the table block needs from the connection."""
        has_trigger = (
            Capability.PRIMARY_KEY_TRIGGERS in self.capabilities
            and self.connection.has_primary_key_trigger(table_name)
        )
        return Table(
            name=table_name,
            columns=tuple(self.connection.columns(table_name)),
            primary_key=self.resolve_primary_key(table_name),
            comment=self.connection.table_comment(table_name),
            temporary=self.connection.temporary_table(table_name),
            primary_key_trigger=has_trigger,
        )

    def table_body(self, table_name: str, stream: TextIO) -> None:
        table = self.load_table(table_name)
        display_name = self.naming.display(table.name)

        stream.write(f"  create_table {display_name}")
        if table.temporary:
            stream.write(", :temporary => true")
        if table.comment is not None:
            stream.write(f", :comment => {quote(table.comment)}")
        if table.has_primary_key:
            if table.primary_key != DEFAULT_PRIMARY_KEY:
                stream.write(f", :primary_key => {quote(table.primary_key)}")
        else:
            stream.write(", :id => false")
        stream.write(", :force => :cascade")
        stream.write(" do |t|\n")

        self.column_lines(list(table.columns), table.primary_key, stream)

        stream.write("  end\n")
        stream.write("\n")

        if table.primary_key_trigger:
            self.primary_key_trigger(table, stream)

        self.indexes(table_name, stream)

    def primary_key_trigger(self, table: Table, stream: TextIO) -> None:
        stream.write(f"  add_primary_key_trigger {self.naming.display(table.name)}")
        if table.primary_key is not None and table.primary_key != DEFAULT_PRIMARY_KEY:
            stream.write(f", primary_key: {quote(table.primary_key)}")
        stream.write("\n\n")

    def index_statement(self, table_name: str, index: IndexDefinition) -> str:
        # Connections that are not Oracle adapters get the generic statements.
        if Capability.DOMAIN_INDEXES not in self.capabilities:
            return super().index_statement(table_name, index)

        display_name = self.naming.display(table_name)
        if index.type is None:
            parts = [f"add_index {display_name}", quote(index.columns)]
            parts.append(f":name => {quote(index.name)}")
            if index.unique:
                parts.append(":unique => true")
            if index.tablespace:
                parts.append(f":tablespace => {quote(index.tablespace)}")
        elif index.type == CONTEXT_INDEX_TYPE:
            parts = [f"add_context_index {display_name}"]
            if index.statement_parameters:
                parts.append(index.statement_parameters)
            else:
                parts.append(quote(index.columns))
                parts.append(f":name => {quote(index.name)}")
        else:
            logger.warning(
                "Unrecognized index %s of type %s on %s", index.name, index.type, table_name
            )
            parts = [
                f"# unrecognized index {quote(index.name)} with type {quote(index.type)}"
            ]
        return "  " + ", ".join(parts)

    def synonyms(self, stream: TextIO) -> None:
        """Write the synonyms of the current schema, sorted by stripped name."""
        if Capability.SYNONYMS not in self.capabilities:
            return
        written = 0
        for synonym in sorted(
            self.connection.synonyms(), key=lambda s: self.filter.sort_key(s.name)
        ):
            if self.filter.ignored(synonym.name):
                continue
            stream.write(
                f"  add_synonym {quote(synonym.name)}, {quote(synonym.target)}, force: true\n"
            )
            written += 1
        if written:
            stream.write("\n")


def build_dumper(
    connection: SchemaConnection, options: DumpOptions | None = None
) -> SchemaDumper:
    """
    Pick the dumper for a connection once, from its declared capabilities.

    Raises:
        ConfigurationError: If the ignore list in ``options`` is malformed.
    """
    capabilities = frozenset(getattr(connection, "capabilities", ()))
    if Capability.MATERIALIZED_VIEWS in capabilities:
        return OracleSchemaDumper(connection, options)
    return SchemaDumper(connection, options)


def dump(
    connection: SchemaConnection, stream: TextIO, options: DumpOptions | None = None
) -> TextIO:
    """Dump the schema behind ``connection`` into ``stream``."""
    return build_dumper(connection, options).dump(stream)
