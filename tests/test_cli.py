from typer.testing import CliRunner

from oradump.cli import cli
from oradump.cli.commands import schema
from oradump.cli.common.context import SchemaAppContext
from oradump.core.auth import OracleConnectError, resolve_credentials
from oradump.core.models import Column, SynonymDefinition

runner = CliRunner()

ID = Column(name="id", sql_type="NUMBER", type="integer")


class _DbConnection:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


def _patch_context(monkeypatch, adapter):
    db = _DbConnection()

    def _build(user, password, dsn):
        return SchemaAppContext(dsn="db:1521/test", connection=db, adapter=adapter)

    monkeypatch.setattr(schema, "build_schema_context", _build)
    return db


def test_dump_to_stdout_and_close_connection(monkeypatch, make_connection):
    adapter = make_connection(
        columns={"app_users": [ID], "app_posts": [ID]},
        synonyms=[SynonymDefinition(name="people", table_name="users", table_owner="hr")],
    )
    db = _patch_context(monkeypatch, adapter)

    result = runner.invoke(
        cli.app, ["schema", "dump", "--table-prefix", "app_", "--ignore", "posts"]
    )

    assert result.exit_code == 0, result.output
    assert 'create_table "users"' in result.stdout
    assert 'create_table "posts"' not in result.stdout
    assert 'add_synonym "people", "hr.users", force: true' in result.stdout
    assert db.closed is True


def test_dump_writes_file(monkeypatch, make_connection, tmp_path):
    _patch_context(monkeypatch, make_connection(columns={"users": [ID]}))
    target = tmp_path / "schema.rb"

    result = runner.invoke(cli.app, ["schema", "dump", "--output", str(target)])

    assert result.exit_code == 0, result.output
    assert target.read_text(encoding="utf-8").endswith("end\n")


def test_dump_rejects_invalid_ignore_pattern(monkeypatch, make_connection):
    _patch_context(monkeypatch, make_connection(columns={"users": [ID]}))

    result = runner.invoke(cli.app, ["schema", "dump", "--ignore", "/[/"])

    assert result.exit_code == 2
    assert "create_table" not in result.stdout


def test_tables_preview_lists_filtered_tables(monkeypatch, make_connection):
    _patch_context(
        monkeypatch,
        make_connection(columns={"users": [ID], "tmp_load": [ID]}),
    )

    result = runner.invoke(cli.app, ["schema", "tables", "--ignore", "/^tmp_/"])

    assert result.exit_code == 0, result.output
    assert "users" in result.output
    assert "tmp_load" not in result.output


def test_resolve_credentials_reads_environment(monkeypatch):
    monkeypatch.setenv("ORADUMP_USER", "scott")
    monkeypatch.setenv("ORADUMP_PASSWORD", "tiger")
    monkeypatch.setenv("ORADUMP_DSN", "//db:1521/orcl/")

    credentials = resolve_credentials()

    assert credentials.user == "scott"
    assert credentials.dsn == "db:1521/orcl"


def test_resolve_credentials_names_missing_settings(monkeypatch):
    for env in ("ORADUMP_USER", "ORADUMP_PASSWORD", "ORADUMP_DSN"):
        monkeypatch.delenv(env, raising=False)

    try:
        resolve_credentials(user="scott")
    except OracleConnectError as exc:
        assert "ORADUMP_PASSWORD" in str(exc)
        assert "ORADUMP_USER" not in str(exc)
    else:
        raise AssertionError("expected OracleConnectError")


def test_tables_preview_lists_synonyms(monkeypatch, make_connection):
    _patch_context(
        monkeypatch,
        make_connection(
            columns={"users": [ID]},
            synonyms=[SynonymDefinition(name="people", table_name="users", table_owner="hr")],
        ),
    )

    result = runner.invoke(cli.app, ["schema", "tables"])

    assert result.exit_code == 0, result.output
    assert "hr.users" in result.output


def test_connect_failure_exits_with_code_1(monkeypatch):
    for env in ("ORADUMP_USER", "ORADUMP_PASSWORD", "ORADUMP_DSN"):
        monkeypatch.delenv(env, raising=False)

    result = runner.invoke(cli.app, ["schema", "dump"])

    assert result.exit_code == 1
    assert "ORADUMP_DSN" in result.output
