import pytest

from oradump.core.adapters.oracle import (
    NATIVE_DATABASE_TYPES,
    OracleAdapter,
    default_trigger_name,
    oracle_downcase,
    schema_default,
    simplified_type,
)
from oradump.core.models import Column


class _Cursor:
    def __init__(self, responses, calls):
        self._responses = responses
        self._calls = calls
        self._result = ([], [])

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, query, params):
        self._calls.append((" ".join(query.split()), dict(params)))
        for marker, result in self._responses.items():
            if marker in query:
                self._result = result
                return
        self._result = (["value"], [])

    @property
    def description(self):
        return [(name.upper(), None) for name in self._result[0]]

    def fetchall(self):
        return list(self._result[1])


class _Connection:
    """Fake oracledb connection answering queries by a substring of their text."""

    def __init__(self, responses):
        self.responses = responses
        self.calls: list[tuple[str, dict]] = []

    def cursor(self):
        return _Cursor(self.responses, self.calls)


@pytest.mark.parametrize(
    ("data_type", "precision", "scale", "expected"),
    [
        ("NUMBER", 38, 0, "integer"),
        ("NUMBER", 1, 0, "boolean"),
        ("NUMBER", 10, 2, "decimal"),
        ("NUMBER", None, None, "decimal"),
        ("VARCHAR2", None, None, "string"),
        ("CLOB", None, None, "text"),
        ("TIMESTAMP(6)", None, None, "timestamp"),
        ("SDO_GEOMETRY", None, None, None),
    ],
)
def test_simplified_type(data_type, precision, scale, expected):
    assert simplified_type(data_type, precision, scale) == expected


def test_oracle_downcase_keeps_mixed_case():
    assert oracle_downcase("USERS") == "users"
    assert oracle_downcase("MixedCase") == "MixedCase"
    assert oracle_downcase(None) is None


def test_default_trigger_name_is_truncated_to_identifier_length():
    assert default_trigger_name("a" * 40) == "a" * 26 + "_pkt"


@pytest.mark.parametrize(
    ("raw", "column_type", "expected"),
    [
        ("'it''s' ", "string", '"it\'s"'),
        ("42", "integer", "42"),
        ("1", "boolean", "true"),
        ("SYSDATE", "datetime", None),
        ("NULL", "string", None),
    ],
)
def test_schema_default(raw, column_type, expected):
    column = Column(name="c", sql_type="X", type=column_type, default=raw)

    assert schema_default(column) == expected


def test_column_spec_renders_active_record_options():
    adapter = OracleAdapter(_Connection({}))
    column = Column(
        name="title",
        sql_type="VARCHAR2(100)",
        type="string",
        null=False,
        default="'draft'",
        limit=100,
        comment="Shown in lists",
    )

    spec = adapter.column_spec(column, NATIVE_DATABASE_TYPES)

    assert spec == {
        "name": '"title"',
        "type": "string",
        "limit": "limit: 100",
        "default": 'default: "draft"',
        "null": "null: false",
        "comment": 'comment: "Shown in lists"',
    }


def test_column_spec_omits_default_string_limit():
    adapter = OracleAdapter(_Connection({}))
    column = Column(name="code", sql_type="VARCHAR2(255)", type="string", limit=255)

    assert "limit" not in adapter.column_spec(column, NATIVE_DATABASE_TYPES)


def test_columns_map_dictionary_rows():
    connection = _Connection(
        {
            "FROM user_tab_columns": (
                ["column_name", "data_type", "char_length", "data_length", "data_precision",
                 "data_scale", "nullable", "data_default", "comments"],
                [
                    ("ID", "NUMBER", 0, 22, 38, 0, "N", None, None),
                    ("PRICE", "NUMBER", 0, 22, 10, 2, "Y", "0", None),
                    ("NAME", "VARCHAR2", 50, 50, None, None, "Y", None, "Label"),
                ],
            )
        }
    )

    columns = OracleAdapter(connection).columns("products")

    assert [c.name for c in columns] == ["id", "price", "name"]
    assert [c.type for c in columns] == ["integer", "decimal", "string"]
    assert columns[1].sql_type == "NUMBER(10,2)"
    assert columns[2].sql_type == "VARCHAR2(50)"
    assert columns[2].limit == 50
    assert connection.calls[0][1] == {"table_name": "PRODUCTS"}


def test_indexes_tag_types_and_hide_default_tablespace():
    connection = _Connection(
        {
            "FROM user_users": (["default_tablespace"], [("USERS",)]),
            "FROM user_indexes": (
                ["index_name", "index_type", "uniqueness", "tablespace_name",
                 "ityp_owner", "ityp_name", "column_name"],
                [
                    ("POSTS_CTX", "DOMAIN", "NONUNIQUE", None, "CTXSYS", "CONTEXT", "BODY"),
                    ("POSTS_SLUG", "NORMAL", "UNIQUE", "USERS", None, None, "BLOG_ID"),
                    ("POSTS_SLUG", "NORMAL", "UNIQUE", "USERS", None, None, "SLUG"),
                    ("POSTS_FLAG", "BITMAP", "NONUNIQUE", "IDX", None, None, "FLAG"),
                ],
            ),
        }
    )

    indexes = {i.name: i for i in OracleAdapter(connection).indexes("posts")}

    assert indexes["posts_ctx"].type == "CTXSYS.CONTEXT"
    assert indexes["posts_slug"].type is None
    assert indexes["posts_slug"].unique is True
    assert indexes["posts_slug"].columns == ("blog_id", "slug")
    assert indexes["posts_slug"].tablespace is None
    assert indexes["posts_flag"].type == "BITMAP"
    assert indexes["posts_flag"].tablespace == "idx"


def test_pk_and_sequence_for_reports_existing_sequence():
    connection = _Connection(
        {
            "FROM user_constraints": (["column_name"], [("ID",)]),
            "FROM user_sequences": (["one"], [(1,)]),
        }
    )

    assert OracleAdapter(connection).pk_and_sequence_for("users") == ("id", "users_seq")


def test_primary_key_is_none_for_composite_keys():
    connection = _Connection(
        {"FROM user_constraints": (["column_name"], [("A",), ("B",)])}
    )

    assert OracleAdapter(connection).primary_key("pairs") is None


def test_has_primary_key_trigger_looks_up_default_trigger_name():
    connection = _Connection({"FROM user_triggers": (["trigger_name"], [("USERS_PKT",)])})

    assert OracleAdapter(connection).has_primary_key_trigger("users") is True
    assert connection.calls[0][1] == {"trigger_name": "USERS_PKT", "table_name": "USERS"}


def test_synonyms_keep_owner_and_db_link():
    connection = _Connection(
        {
            "FROM user_synonyms": (
                ["synonym_name", "table_owner", "table_name", "db_link"],
                [("REMOTE_ORDERS", "SALES", "ORDERS", "HQ.EXAMPLE.COM")],
            )
        }
    )

    (synonym,) = OracleAdapter(connection).synonyms()

    assert synonym.target == "sales.orders@hq.example.com"


def test_temporary_table_and_comment():
    connection = _Connection(
        {
            "SELECT temporary": (["temporary"], [("Y",)]),
            "FROM user_tab_comments": (["comments"], [("Per session",)]),
        }
    )
    adapter = OracleAdapter(connection)

    assert adapter.temporary_table("sessions") is True
    assert adapter.table_comment("sessions") == "Per session"


def test_schema_version_is_none_without_schema_migrations():
    assert OracleAdapter(_Connection({})).schema_version() is None
