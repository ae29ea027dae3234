import re
import sqlite3
from decimal import Decimal
from typing import Any

from atelier.components.catalog import Criteria, FindOptions
from atelier.components.datagrid import SortOrder

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_COMPARISONS = {">=", "<=", "<", ">", "!=", "="}

sqlite3.register_adapter(Decimal, str)


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def quote_identifier(name: str) -> str:
    if not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid identifier: {name!r}")
    return f'"{name}"'


def build_where(criteria: Criteria) -> tuple[str, list[Any]]:
    """
    Build a WHERE clause body from filter criteria.

    Returns the SQL with ? placeholders and the values in order. Empty
    criteria match every row.
    """
    conditions: list[str] = []
    values: list[Any] = []

    for key, value in criteria.items():
        if key in ("$or", "$and") and isinstance(value, list):
            joiner = " OR " if key == "$or" else " AND "
            parts = []
            for sub_criteria in value:
                sub_sql, sub_values = build_where(sub_criteria)
                parts.append(f"({sub_sql})")
                values.extend(sub_values)
            if parts:
                conditions.append(f"({joiner.join(parts)})")
            continue

        column = quote_identifier(key)
        if isinstance(value, dict):
            parts = []
            for op, op_value in value.items():
                if op == "$in":
                    placeholders = ", ".join("?" for _ in op_value)
                    parts.append(f"{column} IN ({placeholders})")
                    values.extend(op_value)
                elif op == "$like":
                    # LIKE is case-insensitive for ASCII in SQLite
                    parts.append(f"{column} LIKE ?")
                    values.append(op_value)
                elif op in _COMPARISONS:
                    parts.append(f"{column} {op} ?")
                    values.append(op_value)
                else:
                    raise ValueError(f"Unsupported operator: {op}")
            if parts:
                conditions.append(f"({' AND '.join(parts)})")
        elif value == "IS_NULL":
            conditions.append(f"{column} IS NULL")
        elif value == "IS_NOT_NULL":
            conditions.append(f"{column} IS NOT NULL")
        else:
            conditions.append(f"{column} = ?")
            values.append(value)

    return (" AND ".join(conditions) if conditions else "1 = 1"), values


class SQLiteCatalogRepo:
    def __init__(self, db_path: str, table: str):
        self.db_path = db_path
        self.table = table
        self._table_sql = quote_identifier(table)

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def find(self, criteria: Criteria, options: FindOptions) -> list[dict[str, Any]]:
        where, values = build_where(criteria)
        query = f"SELECT * FROM {self._table_sql} WHERE {where}"

        if options.order_by:
            direction = "DESC" if options.order == SortOrder.DESC else "ASC"
            query += f" ORDER BY {quote_identifier(options.order_by)} {direction}, id {direction}"

        if options.limit is not None or options.offset:
            query += " LIMIT ?"
            values.append(options.limit if options.limit is not None else -1)
        if options.offset:
            query += " OFFSET ?"
            values.append(options.offset)

        conn = self._get_conn()
        try:
            return conn.execute(query, values).fetchall()
        finally:
            conn.close()

    def count(self, criteria: Criteria) -> int:
        where, values = build_where(criteria)
        conn = self._get_conn()
        try:
            row = conn.execute(
                f"SELECT COUNT(*) AS count FROM {self._table_sql} WHERE {where}", values
            ).fetchone()
            return int(row["count"]) if row else 0
        finally:
            conn.close()

    def create(self, values: dict[str, Any]) -> dict[str, Any]:
        columns = ", ".join(quote_identifier(k) for k in values)
        placeholders = ", ".join("?" for _ in values)
        conn = self._get_conn()
        try:
            cursor = conn.execute(
                f"INSERT INTO {self._table_sql} ({columns}) VALUES ({placeholders})",
                list(values.values()),
            )
            conn.commit()
            row = conn.execute(
                f"SELECT * FROM {self._table_sql} WHERE id = ?", (cursor.lastrowid,)
            ).fetchone()
            return row
        finally:
            conn.close()

    def update(self, record_id: int, values: dict[str, Any]) -> dict[str, Any] | None:
        if not values:
            raise ValueError("Cannot update without values")
        assignments = ", ".join(f"{quote_identifier(k)} = ?" for k in values)
        conn = self._get_conn()
        try:
            cursor = conn.execute(
                f"UPDATE {self._table_sql} SET {assignments}, updated_at = CURRENT_TIMESTAMP "
                "WHERE id = ?",
                [*values.values(), record_id],
            )
            conn.commit()
            if cursor.rowcount == 0:
                return None
            return conn.execute(
                f"SELECT * FROM {self._table_sql} WHERE id = ?", (record_id,)
            ).fetchone()
        finally:
            conn.close()

    def destroy(self, record_id: int) -> bool:
        conn = self._get_conn()
        try:
            cursor = conn.execute(f"DELETE FROM {self._table_sql} WHERE id = ?", (record_id,))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()
