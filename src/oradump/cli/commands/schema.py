"""Commands for dumping an Oracle schema."""

import io
import sys
from pathlib import Path

import typer

from oradump.cli.common.context import SchemaAppContext, build_schema_context
from oradump.cli.common.exits import exit_from_error, ok_exit, warn_exit
from oradump.cli.common.options import (
    ConfirmOpt,
    DsnOpt,
    IgnoreOpt,
    OutputOpt,
    PasswordOpt,
    PrefixOpt,
    SuffixOpt,
    UserOpt,
    VerboseOpt,
)
from oradump.cli.common.options_builder import build_dump_options
from oradump.cli.common.output import configure_logging, out
from oradump.core.models import Capability
from oradump.core.oracle_dumper import build_dumper
from oradump.core.selectors import ConfigurationError

app = typer.Typer(
    help="Dump an Oracle schema as schema.rb",
    no_args_is_help=True,
)


@app.callback()
def _init(
    ctx: typer.Context,
    user: str | None = UserOpt,
    password: str | None = PasswordOpt,
    dsn: str | None = DsnOpt,
    verbose: bool = VerboseOpt,
):
    """Connect once per invocation; the connection is closed on exit."""
    configure_logging(verbose)
    appctx = build_schema_context(user, password, dsn)
    ctx.obj = appctx
    ctx.call_on_close(appctx.close)


@app.command()
def dump(
    ctx: typer.Context,
    output: str = OutputOpt,
    ignore: list[str] = IgnoreOpt,
    prefix: str = PrefixOpt,
    suffix: str = SuffixOpt,
    confirm: bool = ConfirmOpt,
):
    """
    Write tables, indexes, foreign keys and synonyms as schema.rb.
    """
    appctx: SchemaAppContext = ctx.obj

    try:
        options = build_dump_options(ignore=ignore, prefix=prefix, suffix=suffix)
        dumper = build_dumper(appctx.adapter, options)
    except ConfigurationError as e:
        exit_from_error(e)

    if output == "-":
        dumper.dump(sys.stdout)
        return

    path = Path(output)
    if path.exists() and confirm and not out.confirm(f"Overwrite {path}?"):
        ok_exit("Cancelled")

    # The file is only written once the whole dump rendered.
    buffer = io.StringIO()
    with out.status(f"Dumping schema from {appctx.dsn}..."):
        dumper.dump(buffer)
    path.write_text(buffer.getvalue(), encoding="utf-8")
    out.success(f"Schema written to {path}")


@app.command()
def tables(
    ctx: typer.Context,
    ignore: list[str] = IgnoreOpt,
    prefix: str = PrefixOpt,
    suffix: str = SuffixOpt,
):
    """
    Preview which tables and synonyms a dump would contain.
    """
    appctx: SchemaAppContext = ctx.obj

    try:
        options = build_dump_options(ignore=ignore, prefix=prefix, suffix=suffix)
        dumper = build_dumper(appctx.adapter, options)
    except ConfigurationError as e:
        exit_from_error(e)

    with out.status("Loading tables..."):
        names = dumper.table_names()

    if not names:
        warn_exit("No tables to dump")

    display = {name: dumper.naming.strip(name) for name in names}
    out.tables_table(names, display=display, title="Tables to dump")

    if Capability.SYNONYMS in dumper.capabilities:
        synonyms = [
            s
            for s in sorted(
                appctx.adapter.synonyms(), key=lambda s: dumper.filter.sort_key(s.name)
            )
            if not dumper.filter.ignored(s.name)
        ]
        if synonyms:
            out.synonyms_table(synonyms, title="Synonyms to dump")
