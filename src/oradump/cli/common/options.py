"""Common CLI options for the CLI."""

import typer

TABLE_PREFIX_ENV = "ORADUMP_TABLE_PREFIX"
TABLE_SUFFIX_ENV = "ORADUMP_TABLE_SUFFIX"

UserOpt = typer.Option(
    None,
    "--user",
    "-u",
    help="Oracle user (default: $ORADUMP_USER)",
)

PasswordOpt = typer.Option(
    None,
    "--password",
    help="Oracle password (default: $ORADUMP_PASSWORD)",
)

DsnOpt = typer.Option(
    None,
    "--dsn",
    "-d",
    help="Easy Connect string, e.g. host:1521/service (default: $ORADUMP_DSN)",
)

VerboseOpt = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Log introspection queries and skipped objects",
)

IgnoreOpt = typer.Option(
    [],
    "--ignore",
    "-i",
    help="Table or synonym to leave out. Wrap in slashes for a regex: /^tmp_/. Reusable.",
    show_default=False,
)

PrefixOpt = typer.Option(
    "",
    "--table-prefix",
    envvar=TABLE_PREFIX_ENV,
    help="Prefix the application adds to table names",
)

SuffixOpt = typer.Option(
    "",
    "--table-suffix",
    envvar=TABLE_SUFFIX_ENV,
    help="Suffix the application adds to table names",
)

OutputOpt = typer.Option(
    "-",
    "--output",
    "-o",
    help="File to write schema.rb to ('-' for stdout)",
)

ConfirmOpt = typer.Option(
    True,
    "--confirm/--no-confirm",
    help="Ask for confirmation before overwriting an existing file",
)
