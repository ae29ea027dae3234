"""
Catalog component - Data models.

Course and product rows as shown in the admin grids, plus the inputs and
outputs of paged listing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Generic, TypeVar

from atelier.components.datagrid import PageResult, SortOrder

T = TypeVar("T")

Criteria = dict[str, Any]


def _decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    return Decimal(str(value))


# --- Validation Errors ---


@dataclass(frozen=True)
class CatalogValidationError:
    """Catalog validation error."""

    code: str
    message: str
    field: str | None = None


# --- Records ---


@dataclass(frozen=True)
class Course:
    id: int
    title: str
    description: str
    max_price: Decimal
    discounted_price: Decimal
    discount_percentage: Decimal
    created_at: str
    updated_at: str

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Course:
        return cls(
            id=int(row["id"]),
            title=row["title"],
            description=row.get("description") or "",
            max_price=_decimal(row.get("max_price")),
            discounted_price=_decimal(row.get("discounted_price")),
            discount_percentage=_decimal(row.get("discount_percentage")),
            created_at=row.get("created_at") or "",
            updated_at=row.get("updated_at") or "",
        )


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    category: str
    price: Decimal
    description: str
    is_featured: bool
    created_at: str

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Product:
        return cls(
            id=int(row["id"]),
            name=row["name"],
            category=row.get("category") or "",
            price=_decimal(row.get("price")),
            description=row.get("description") or "",
            is_featured=bool(row.get("is_featured")),
            created_at=row.get("created_at") or "",
        )


# --- Table Configuration ---


@dataclass(frozen=True)
class TableConfig:
    """How one catalog table is searched, filtered and sorted."""

    table: str
    search_field: str
    sortable: tuple[str, ...]
    default_order_by: str = "created_at"
    default_order: SortOrder = SortOrder.DESC
    filterable: tuple[str, ...] = ()


# --- Repository Options ---


@dataclass(frozen=True)
class FindOptions:
    limit: int | None = None
    offset: int | None = None
    order_by: str | None = None
    order: SortOrder = SortOrder.ASC


# --- Input Models ---


@dataclass(frozen=True)
class ListPageInput:
    """Input for listing one page of a catalog table."""

    page: int = 1
    limit: int = 10
    search: str = ""
    sort_by: str = ""
    sort_order: SortOrder = SortOrder.DESC
    filters: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class GetRecordInput:
    record_id: int


# --- Output Models ---


@dataclass(frozen=True)
class ListPageOutput(Generic[T]):
    """Output from a list operation."""

    result: PageResult[T] | None
    errors: tuple[CatalogValidationError, ...]
    success: bool


@dataclass(frozen=True)
class RecordOutput(Generic[T]):
    record: T | None
    errors: tuple[CatalogValidationError, ...]
    success: bool
