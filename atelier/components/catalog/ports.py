"""
Catalog component - Port interfaces.
"""

from __future__ import annotations

from typing import Any, Protocol

from .models import Criteria, FindOptions


class CatalogRepoPort(Protocol):
    """
    Row storage for one catalog table.

    Criteria use the filter language: plain values compare for equality,
    operator maps ({">=": 10}, {"$like": "%silk%"}, {"$in": [...]}) apply
    operators, "IS_NULL" / "IS_NOT_NULL" test for null, and "$or" / "$and"
    hold lists of nested criteria.
    """

    def find(self, criteria: Criteria, options: FindOptions) -> list[dict[str, Any]]:
        """Rows matching criteria."""
        ...

    def count(self, criteria: Criteria) -> int:
        """Number of rows matching criteria."""
        ...

    def create(self, values: dict[str, Any]) -> dict[str, Any]:
        """Insert a row and return it with its id."""
        ...

    def update(self, record_id: int, values: dict[str, Any]) -> dict[str, Any] | None:
        """Update a row. Returns None if not found."""
        ...

    def destroy(self, record_id: int) -> bool:
        """Delete a row. Returns False if not found."""
        ...
