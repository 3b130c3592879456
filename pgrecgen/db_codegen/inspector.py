"""Schema introspection against a live database or a YAML snapshot."""

from __future__ import annotations

from typing import Any, Final, Protocol, Sequence

import psycopg
from psycopg.rows import dict_row

from ..shared.schema_loader import DEFAULT_SNAPSHOT_SCHEMA, DEFAULT_TABLE_TYPE
from .type_mapper import ColumnInfo

TABLES_QUERY: Final[str] = """
    SELECT table_name
        FROM information_schema.tables
        WHERE table_schema = %s AND table_type = 'BASE TABLE'
        ORDER BY table_name
"""

COLUMNS_QUERY: Final[str] = """
    SELECT column_name, ordinal_position, is_nullable, udt_name, character_maximum_length
        FROM information_schema.columns
        WHERE table_name = %s{schema_filter}
        ORDER BY ordinal_position
"""

SCHEMA_FILTER: Final[str] = " AND table_schema = %s"


class SchemaInspector(Protocol):
    """Source of table and column metadata for one run."""

    def list_tables(self, schema_name: str) -> list[str]:
        ...

    def list_columns(
        self,
        table_name: str,
        schema_name: str | None = None,
    ) -> list[ColumnInfo]:
        ...


def order_columns(columns: Sequence[ColumnInfo]) -> list[ColumnInfo]:
    """Order columns by ascending ordinal position."""
    return sorted(columns, key=lambda column: column.ordinal)


class PgSchemaInspector:
    """Reads ``information_schema`` over a single psycopg connection.

    Database errors propagate unchanged to the caller.

    Usage:
        with psycopg.connect(url) as conn:
            inspector = PgSchemaInspector(conn)
            tables = inspector.list_tables("public")
    """

    def __init__(self, conn: psycopg.Connection) -> None:
        self.conn = conn

    def list_tables(self, schema_name: str) -> list[str]:
        """List the base tables of a schema, sorted by name."""
        with self.conn.cursor(row_factory=dict_row) as cur:
            cur.execute(TABLES_QUERY, (schema_name,))
            rows = cur.fetchall()
        return [row["table_name"] for row in rows]

    def list_columns(
        self,
        table_name: str,
        schema_name: str | None = None,
    ) -> list[ColumnInfo]:
        """List a table's columns by ordinal. Unknown tables give ``[]``."""
        params: tuple[str, ...] = (table_name,)
        schema_filter = ""
        if schema_name is not None:
            schema_filter = SCHEMA_FILTER
            params += (schema_name,)
        query = COLUMNS_QUERY.format(schema_filter=schema_filter)

        with self.conn.cursor(row_factory=dict_row) as cur:
            cur.execute(query, params)
            rows = cur.fetchall()
        return order_columns([ColumnInfo.from_row(row) for row in rows])


class SnapshotInspector:
    """Serves schema metadata from a loaded YAML snapshot.

    See :func:`pgrecgen.shared.schema_loader.load_snapshot` for the
    document format.
    """

    def __init__(self, snapshot: dict[str, Any]) -> None:
        self.snapshot = snapshot

    def _tables(self) -> list[dict[str, Any]]:
        return self.snapshot.get("tables", [])

    def list_tables(self, schema_name: str) -> list[str]:
        names = {
            table["name"]
            for table in self._tables()
            if table.get("schema", DEFAULT_SNAPSHOT_SCHEMA) == schema_name
            and table.get("type", DEFAULT_TABLE_TYPE) == DEFAULT_TABLE_TYPE
        }
        return sorted(names)

    def list_columns(
        self,
        table_name: str,
        schema_name: str | None = None,
    ) -> list[ColumnInfo]:
        columns: list[ColumnInfo] = []
        for table in self._tables():
            if table["name"] != table_name:
                continue
            if schema_name is not None and table.get("schema", DEFAULT_SNAPSHOT_SCHEMA) != schema_name:
                continue
            columns.extend(
                ColumnInfo.from_row(
                    {
                        "column_name": column["name"],
                        "ordinal_position": column["ordinal"],
                        "is_nullable": column.get("nullable", "NO"),
                        "udt_name": column["udt_name"],
                        "character_maximum_length": column.get("length"),
                    }
                )
                for column in table.get("columns", [])
            )
        return order_columns(columns)
