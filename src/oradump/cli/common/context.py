"""Application context management for the CLI."""

from dataclasses import dataclass

import oracledb

from oradump.cli.common.exits import exit_from_error
from oradump.core.adapters.oracle import OracleAdapter
from oradump.core.auth import OracleConnectError, get_connection, resolve_credentials


@dataclass
class SchemaAppContext:
    """Application context holding the Oracle connection and its adapter."""

    dsn: str
    connection: oracledb.Connection
    adapter: OracleAdapter

    def close(self) -> None:
        """Close the underlying connection."""
        self.connection.close()


def build_schema_context(
    user: str | None, password: str | None, dsn: str | None
) -> SchemaAppContext:
    """Connect to Oracle and return the context for schema commands.

    Args:
        user: Oracle user, or None to read it from the environment.
        password: Oracle password, or None to read it from the environment.
        dsn: Easy Connect string, or None to read it from the environment.

    Returns:
        SchemaAppContext: Context with an open connection and adapter.
    """
    try:
        credentials = resolve_credentials(user, password, dsn)
        connection = get_connection(credentials)
    except OracleConnectError as exc:
        exit_from_error(exc)
    return SchemaAppContext(
        dsn=credentials.dsn, connection=connection, adapter=OracleAdapter(connection)
    )
