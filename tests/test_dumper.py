import io

from oradump.core.columns import format_column_rows, used_keys
from oradump.core.dumper import SchemaDumper, foreign_key_column_for
from oradump.core.models import Capability, Column, DumpOptions, IndexDefinition


def test_used_keys_keep_canonical_order():
    specs = [{"type": "string", "null": "null: false", "name": '"a"'}]

    assert used_keys(specs, ["name", "limit", "null"]) == ["name", "null"]


def test_format_column_rows_handles_no_columns():
    assert format_column_rows([], ["name"]) == []


def test_foreign_key_column_for_singularizes_simple_plurals():
    assert foreign_key_column_for("users") == "user_id"
    assert foreign_key_column_for("categories") == "category_id"
    assert foreign_key_column_for("address") == "address_id"


def test_generic_dumper_uses_generic_syntax(make_connection):
    connection = make_connection(
        capabilities={Capability.PRIMARY_KEY},
        columns={
            "users": [
                Column(name="id", sql_type="NUMBER", type="integer"),
                Column(name="email", sql_type="VARCHAR2(255)", type="string", null=False),
            ]
        },
        indexes={"users": [IndexDefinition(table="users", name="users_email", columns=("email",), unique=True)]},
        temporary=["users"],
        comments={"users": "ignored by the generic dumper"},
    )

    stream = io.StringIO()
    SchemaDumper(connection, DumpOptions()).dump(stream)
    output = stream.getvalue()

    assert (
        '  create_table "users", force: :cascade do |t|\n'
        '    t.string "email", null: false\n'
        "  end\n"
        "\n"
        '  add_index "users", ["email"], name: "users_email", unique: true\n'
    ) in output
    assert "temporary" not in output
    assert "comment" not in output


def test_generic_dumper_without_primary_key_capability_marks_id_false(make_connection):
    connection = make_connection(capabilities=set(), columns={"logs": []})

    stream = io.StringIO()
    SchemaDumper(connection).dump(stream)

    assert '  create_table "logs", id: false, force: :cascade do |t|\n  end\n' in stream.getvalue()
