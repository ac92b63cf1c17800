"""CLI application for Oracle schema dumps."""

import typer

from oradump.cli.commands.schema import app as schema_app

app = typer.Typer(
    help="oradump - dump Oracle schemas as schema.rb",
    no_args_is_help=True,
)

app.add_typer(schema_app, name="schema", help="Dump / preview an Oracle schema.")


if __name__ == "__main__":
    app()
