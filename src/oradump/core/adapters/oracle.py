from __future__ import annotations

import logging
import re
from typing import Any, Mapping

import oracledb

from oradump.core.models import (
    Capability,
    Column,
    ForeignKeyDefinition,
    IndexDefinition,
    SynonymDefinition,
)
from oradump.core.naming import quote

logger = logging.getLogger(__name__)

IDENTIFIER_MAX_LENGTH = 30

NATIVE_DATABASE_TYPES: dict[str, dict[str, Any]] = {
    "primary_key": {"name": "NUMBER(38) NOT NULL PRIMARY KEY"},
    "string": {"name": "VARCHAR2", "limit": 255},
    "text": {"name": "CLOB"},
    "integer": {"name": "NUMBER", "limit": 38},
    "float": {"name": "BINARY_FLOAT"},
    "decimal": {"name": "DECIMAL"},
    "datetime": {"name": "DATE"},
    "timestamp": {"name": "TIMESTAMP"},
    "time": {"name": "DATE"},
    "date": {"name": "DATE"},
    "binary": {"name": "BLOB"},
    "boolean": {"name": "NUMBER", "limit": 1},
    "raw": {"name": "RAW", "limit": 2000},
}

MIGRATION_KEYS = ["name", "limit", "precision", "scale", "default", "null", "comment"]

_NUMERIC_DEFAULT = re.compile(r"^-?\d+(\.\d+)?$")
_QUOTED_DEFAULT = re.compile(r"^'(.*)'$", re.DOTALL)


def oracle_downcase(name: str | None) -> str | None:
    """Down-case unquoted (all upper case) identifiers; keep mixed case as is."""
    if name is None:
        return None
    return name.lower() if name == name.upper() else name


def oracle_upcase(name: str) -> str:
    """Inverse of :func:`oracle_downcase` for dictionary lookups."""
    return name.upper() if name == name.lower() else name


def default_trigger_name(table_name: str) -> str:
    return f"{table_name[: IDENTIFIER_MAX_LENGTH - 4]}_pkt"


def default_sequence_name(table_name: str) -> str:
    return f"{table_name[: IDENTIFIER_MAX_LENGTH - 4]}_seq"


def simplified_type(data_type: str, precision: int | None, scale: int | None) -> str | None:
    """Map an Oracle data type to an abstract migration type (None if unmapped)."""
    data_type = data_type.upper()
    if data_type == "NUMBER":
        if precision == 1 and scale == 0:
            return "boolean"
        if scale == 0:
            return "integer"
        return "decimal"
    if data_type in ("FLOAT", "BINARY_FLOAT", "BINARY_DOUBLE"):
        return "float"
    if data_type in ("VARCHAR2", "NVARCHAR2", "VARCHAR", "CHAR", "NCHAR"):
        return "string"
    if data_type in ("CLOB", "NCLOB", "LONG"):
        return "text"
    if data_type == "BLOB":
        return "binary"
    if data_type == "RAW":
        return "raw"
    if data_type == "DATE":
        return "datetime"
    if data_type.startswith("TIMESTAMP"):
        return "timestamp"
    return None


def schema_default(column: Column) -> str | None:
    """Render a literal default value; expressions such as SYSDATE are skipped."""
    if column.default is None:
        return None
    raw = column.default.strip()
    if not raw or raw.upper() == "NULL":
        return None
    quoted = _QUOTED_DEFAULT.match(raw)
    if quoted:
        return quote(quoted.group(1).replace("''", "'"))
    if _NUMERIC_DEFAULT.match(raw):
        if column.type == "boolean":
            return "true" if raw == "1" else "false"
        return raw
    return None


class OracleAdapter:
    """Adapter around an open ``oracledb`` connection (data dictionary queries)."""

    capabilities = frozenset(
        {
            Capability.MATERIALIZED_VIEWS,
            Capability.SYNONYMS,
            Capability.PRIMARY_KEY_TRIGGERS,
            Capability.PK_AND_SEQUENCE,
            Capability.PRIMARY_KEY,
            Capability.DOMAIN_INDEXES,
            Capability.FOREIGN_KEYS,
        }
    )

    def __init__(self, connection: oracledb.Connection) -> None:
        self.connection = connection
        self._default_tablespace: str | None = None

    def _select_all(self, query: str, params: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        """Run a query and return rows as dicts keyed by lower-case column name."""
        logger.debug("SQL: %s %s", " ".join(query.split()), params or {})
        with self.connection.cursor() as cursor:
            cursor.execute(query, params or {})
            names = [d[0].lower() for d in cursor.description]
            return [dict(zip(names, row)) for row in cursor.fetchall()]

    def _select_value(self, query: str, params: Mapping[str, Any] | None = None) -> Any:
        rows = self._select_all(query, params)
        if not rows:
            return None
        return next(iter(rows[0].values()))

    def tables(self) -> list[str]:
        rows = self._select_all(
            """
            SELECT table_name FROM user_tables
            WHERE secondary = 'N' AND nested = 'NO' AND dropped = 'NO'
              AND (iot_type IS NULL OR iot_type = 'IOT')
            """
        )
        return [oracle_downcase(r["table_name"]) for r in rows]

    def materialized_views(self) -> list[str]:
        rows = self._select_all("SELECT mview_name FROM user_mviews")
        return [oracle_downcase(r["mview_name"]) for r in rows]

    def columns(self, table_name: str) -> list[Column]:
        rows = self._select_all(
            """
            SELECT c.column_name, c.data_type, c.char_length, c.data_length, c.data_precision,
                   c.data_scale, c.nullable, c.data_default, cc.comments
            FROM user_tab_columns c
            LEFT JOIN user_col_comments cc
              ON cc.table_name = c.table_name AND cc.column_name = c.column_name
            WHERE c.table_name = :table_name
            ORDER BY c.column_id
            """,
            {"table_name": oracle_upcase(table_name)},
        )
        columns = []
        for r in rows:
            data_type = r["data_type"]
            precision = r["data_precision"]
            scale = r["data_scale"]
            abstract = simplified_type(data_type, precision, scale)
            limit = None
            if abstract == "string":
                limit = r["char_length"]
            elif abstract == "raw":
                limit = r["data_length"]
            sql_type = data_type
            if abstract == "string" and limit:
                sql_type = f"{data_type}({limit})"
            elif precision is not None:
                sql_type = f"{data_type}({precision},{scale or 0})"
            columns.append(
                Column(
                    name=oracle_downcase(r["column_name"]),
                    sql_type=sql_type,
                    type=abstract,
                    null=r["nullable"] == "Y",
                    default=r["data_default"],
                    limit=limit,
                    precision=precision,
                    scale=scale,
                    comment=r["comments"],
                )
            )
        return columns

    def _user_default_tablespace(self) -> str | None:
        if self._default_tablespace is None:
            self._default_tablespace = self._select_value(
                "SELECT default_tablespace FROM user_users"
            )
        return self._default_tablespace

    def indexes(self, table_name: str) -> list[IndexDefinition]:
        rows = self._select_all(
            """
            SELECT i.index_name, i.index_type, i.uniqueness, i.tablespace_name,
                   i.ityp_owner, i.ityp_name, ic.column_name
            FROM user_indexes i
            JOIN user_ind_columns ic ON ic.index_name = i.index_name
            WHERE i.table_name = :table_name
              AND i.generated = 'N'
              AND NOT EXISTS (
                SELECT 1 FROM user_constraints c
                WHERE c.index_name = i.index_name AND c.constraint_type = 'P'
              )
            ORDER BY i.index_name, ic.column_position
            """,
            {"table_name": oracle_upcase(table_name)},
        )
        default_tablespace = self._user_default_tablespace()
        by_name: dict[str, dict[str, Any]] = {}
        for r in rows:
            entry = by_name.setdefault(r["index_name"], {"row": r, "columns": []})
            entry["columns"].append(oracle_downcase(r["column_name"]))

        indexes = []
        for index_name, entry in by_name.items():
            r = entry["row"]
            if r["index_type"] == "NORMAL":
                index_type = None
            elif r["index_type"] == "DOMAIN":
                index_type = f"{r['ityp_owner']}.{r['ityp_name']}"
            else:
                index_type = r["index_type"]
            tablespace = r["tablespace_name"]
            if tablespace == default_tablespace:
                tablespace = None
            indexes.append(
                IndexDefinition(
                    table=table_name,
                    name=oracle_downcase(index_name),
                    columns=tuple(entry["columns"]),
                    unique=r["uniqueness"] == "UNIQUE",
                    type=index_type,
                    tablespace=oracle_downcase(tablespace),
                )
            )
        return indexes

    def foreign_keys(self, table_name: str) -> list[ForeignKeyDefinition]:
        rows = self._select_all(
            """
            SELECT c.constraint_name, c.delete_rule, cc.column_name,
                   rc.table_name AS to_table, rcc.column_name AS primary_key
            FROM user_constraints c
            JOIN user_cons_columns cc ON cc.constraint_name = c.constraint_name
            JOIN user_constraints rc ON rc.constraint_name = c.r_constraint_name
            JOIN user_cons_columns rcc
              ON rcc.constraint_name = rc.constraint_name AND rcc.position = cc.position
            WHERE c.table_name = :table_name AND c.constraint_type = 'R'
            ORDER BY c.constraint_name
            """,
            {"table_name": oracle_upcase(table_name)},
        )
        on_delete = {"CASCADE": "cascade", "SET NULL": "nullify"}
        return [
            ForeignKeyDefinition(
                from_table=table_name,
                to_table=oracle_downcase(r["to_table"]),
                column=oracle_downcase(r["column_name"]),
                primary_key=oracle_downcase(r["primary_key"]),
                name=oracle_downcase(r["constraint_name"]),
                on_delete=on_delete.get(r["delete_rule"]),
            )
            for r in rows
        ]

    def primary_key(self, table_name: str) -> str | None:
        rows = self._select_all(
            """
            SELECT cc.column_name
            FROM user_constraints c
            JOIN user_cons_columns cc ON cc.constraint_name = c.constraint_name
            WHERE c.table_name = :table_name AND c.constraint_type = 'P'
            """,
            {"table_name": oracle_upcase(table_name)},
        )
        # Composite keys are dumped as regular columns.
        if len(rows) != 1:
            return None
        return oracle_downcase(rows[0]["column_name"])

    def pk_and_sequence_for(self, table_name: str) -> tuple[str, str | None] | None:
        pk = self.primary_key(table_name)
        if pk is None:
            return None
        sequence = default_sequence_name(table_name)
        exists = self._select_value(
            "SELECT 1 FROM user_sequences WHERE sequence_name = :name",
            {"name": oracle_upcase(sequence)},
        )
        return pk, sequence if exists else None

    def temporary_table(self, table_name: str) -> bool:
        flag = self._select_value(
            "SELECT temporary FROM user_tables WHERE table_name = :table_name",
            {"table_name": oracle_upcase(table_name)},
        )
        return flag == "Y"

    def table_comment(self, table_name: str) -> str | None:
        return self._select_value(
            "SELECT comments FROM user_tab_comments WHERE table_name = :table_name",
            {"table_name": oracle_upcase(table_name)},
        )

    def has_primary_key_trigger(self, table_name: str) -> bool:
        found = self._select_value(
            """
            SELECT trigger_name FROM user_triggers
            WHERE trigger_name = :trigger_name AND table_name = :table_name
              AND status = 'ENABLED'
            """,
            {
                "trigger_name": oracle_upcase(default_trigger_name(table_name)),
                "table_name": oracle_upcase(table_name),
            },
        )
        return found is not None

    def synonyms(self) -> list[SynonymDefinition]:
        rows = self._select_all(
            "SELECT synonym_name, table_owner, table_name, db_link FROM user_synonyms"
        )
        return [
            SynonymDefinition(
                name=oracle_downcase(r["synonym_name"]),
                table_name=oracle_downcase(r["table_name"]),
                table_owner=oracle_downcase(r["table_owner"]),
                db_link=oracle_downcase(r["db_link"]),
            )
            for r in rows
        ]

    def native_database_types(self) -> Mapping[str, Mapping[str, Any]]:
        return NATIVE_DATABASE_TYPES

    def migration_keys(self) -> list[str]:
        return list(MIGRATION_KEYS)

    def column_spec(
        self, column: Column, types: Mapping[str, Mapping[str, Any]]
    ) -> dict[str, str]:
        """Render a column like ActiveRecord's schema dumper does."""
        spec: dict[str, str] = {"name": quote(column.name), "type": str(column.type)}
        default_limit = types.get(column.type or "", {}).get("limit")
        if column.type in ("string", "raw") and column.limit != default_limit:
            spec["limit"] = str(column.limit)
        if column.type == "decimal":
            if column.precision is not None:
                spec["precision"] = str(column.precision)
            if column.scale is not None:
                spec["scale"] = str(column.scale)
        elif column.type == "integer" and column.precision not in (None, 38):
            spec["precision"] = str(column.precision)
        default = schema_default(column)
        if default is not None:
            spec["default"] = default
        if not column.null:
            spec["null"] = "false"
        if column.comment:
            spec["comment"] = quote(column.comment)
        for key in spec:
            if key not in ("name", "type"):
                spec[key] = f"{key}: {spec[key]}"
        return spec

    def schema_version(self) -> str | None:
        exists = self._select_value(
            "SELECT 1 FROM user_tables WHERE table_name = 'SCHEMA_MIGRATIONS'"
        )
        if not exists:
            return None
        version = self._select_value("SELECT MAX(version) FROM schema_migrations")
        return str(version) if version is not None else None
