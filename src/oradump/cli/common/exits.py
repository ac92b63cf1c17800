"""Exit handling utilities for the CLI.

Exit codes: 0 success or nothing to do, 1 connection failure, 2 invalid
dump configuration (e.g. a malformed ``--ignore`` pattern).
"""

from typing import NoReturn

import typer

from oradump.cli.common.output import out
from oradump.core.auth import OracleConnectError
from oradump.core.selectors import ConfigurationError

EXIT_CONNECT_FAILED = 1
EXIT_BAD_CONFIGURATION = 2

_EXIT_CODES: dict[type[Exception], int] = {
    OracleConnectError: EXIT_CONNECT_FAILED,
    ConfigurationError: EXIT_BAD_CONFIGURATION,
}


def ok_exit(msg: str | None = None) -> NoReturn:
    """Exit successfully with an optional informational message."""
    if msg:
        out.info(msg)
    raise typer.Exit(0)


def warn_exit(msg: str) -> NoReturn:
    """Exit successfully after a warning (e.g. no tables to dump)."""
    out.warn(msg)
    raise typer.Exit(0)


def exit_from_error(exc: OracleConnectError | ConfigurationError) -> NoReturn:
    """Print an oradump error and exit with the code for its type."""
    out.error(str(exc))
    raise typer.Exit(_EXIT_CODES.get(type(exc), 1)) from exc
