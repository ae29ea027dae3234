"""
In-memory catalog storage for tests and the demo console.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any

from atelier.components.catalog import Criteria, FindOptions
from atelier.components.datagrid import SortOrder


def _like_pattern(pattern: str) -> re.Pattern[str]:
    parts = []
    for ch in pattern:
        if ch == "%":
            parts.append(".*")
        elif ch == "_":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return re.compile("^" + "".join(parts) + "$", re.IGNORECASE | re.DOTALL)


def _comparable(value: Any) -> Any:
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return Decimal(str(value))
    if isinstance(value, str):
        try:
            return Decimal(value)
        except InvalidOperation:
            return value
    return value


def _compare(op: str, left: Any, right: Any) -> bool:
    if left is None:
        return False
    a, b = _comparable(left), _comparable(right)
    if type(a) is not type(b):
        a, b = str(left), str(right)
    if op == ">=":
        return a >= b
    if op == "<=":
        return a <= b
    if op == "<":
        return a < b
    if op == ">":
        return a > b
    if op == "!=":
        return a != b
    if op == "=":
        return a == b
    raise ValueError(f"Unsupported operator: {op}")


def matches(row: dict[str, Any], criteria: Criteria) -> bool:
    """Evaluate filter criteria against a single row."""
    for key, value in criteria.items():
        if key == "$or" and isinstance(value, list):
            if value and not any(matches(row, sub) for sub in value):
                return False
            continue
        if key == "$and" and isinstance(value, list):
            if not all(matches(row, sub) for sub in value):
                return False
            continue

        actual = row.get(key)
        if isinstance(value, dict):
            for op, op_value in value.items():
                if op == "$in":
                    if actual not in op_value:
                        return False
                elif op == "$like":
                    if actual is None or not _like_pattern(op_value).match(str(actual)):
                        return False
                elif not _compare(op, actual, op_value):
                    return False
        elif value == "IS_NULL":
            if actual is not None:
                return False
        elif value == "IS_NOT_NULL":
            if actual is None:
                return False
        elif actual != value:
            return False
    return True


class InMemoryCatalogRepo:
    def __init__(self, rows: list[dict[str, Any]] | None = None):
        self._rows: list[dict[str, Any]] = []
        self._next_id = 1
        for row in rows or []:
            self.create(row)

    def find(self, criteria: Criteria, options: FindOptions) -> list[dict[str, Any]]:
        rows = [r for r in self._rows if matches(r, criteria)]

        if options.order_by:
            key = options.order_by
            reverse = options.order == SortOrder.DESC
            present = [_comparable(r.get(key)) for r in rows if r.get(key) is not None]
            numeric = all(isinstance(v, Decimal) for v in present)

            def sort_key(r: dict[str, Any]) -> tuple[bool, Any]:
                v = r.get(key)
                if v is None:
                    return (False, Decimal(0) if numeric else "")
                return (True, _comparable(v) if numeric else str(v))

            # Nulls sort first ascending, as SQLite does; ties break on id
            rows.sort(key=lambda r: r["id"], reverse=reverse)
            rows.sort(key=sort_key, reverse=reverse)

        start = options.offset or 0
        end = start + options.limit if options.limit is not None else None
        return [dict(r) for r in rows[start:end]]

    def count(self, criteria: Criteria) -> int:
        return sum(1 for r in self._rows if matches(r, criteria))

    def create(self, values: dict[str, Any]) -> dict[str, Any]:
        row = dict(values)
        if "id" in row and row["id"] is not None:
            self._next_id = max(self._next_id, int(row["id"]) + 1)
        else:
            row["id"] = self._next_id
            self._next_id += 1
        self._rows.append(row)
        return dict(row)

    def update(self, record_id: int, values: dict[str, Any]) -> dict[str, Any] | None:
        for row in self._rows:
            if row["id"] == record_id:
                row.update(values)
                return dict(row)
        return None

    def destroy(self, record_id: int) -> bool:
        before = len(self._rows)
        self._rows = [r for r in self._rows if r["id"] != record_id]
        return len(self._rows) < before
