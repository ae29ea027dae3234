"""
CatalogService - Paged listing of catalog tables.

Turns a page request into repository criteria and options, and wraps the
rows in a PageResult for the grids.

Functional Core - pure business logic.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from atelier.components.datagrid import PageResult, PaginationInfo

from .models import (
    CatalogValidationError,
    Criteria,
    FindOptions,
    ListPageInput,
    TableConfig,
)
from .ports import CatalogRepoPort

T = TypeVar("T")

DEFAULT_MAX_PAGE_SIZE = 100
ALL_VALUES = "All"


# --- Validation Functions ---


def validate_list_input(
    input_data: ListPageInput,
    config: TableConfig,
    max_page_size: int = DEFAULT_MAX_PAGE_SIZE,
) -> list[CatalogValidationError]:
    """Validate a page request against the table configuration."""
    errors: list[CatalogValidationError] = []

    if input_data.page < 1:
        errors.append(
            CatalogValidationError(
                code="page_invalid",
                message="Page must be 1 or greater",
                field="page",
            )
        )

    if input_data.limit < 1 or input_data.limit > max_page_size:
        errors.append(
            CatalogValidationError(
                code="limit_invalid",
                message=f"Limit must be between 1 and {max_page_size}",
                field="limit",
            )
        )

    if input_data.sort_by and input_data.sort_by not in config.sortable:
        errors.append(
            CatalogValidationError(
                code="sort_invalid",
                message=(
                    f"Cannot sort {config.table} by '{input_data.sort_by}'. "
                    f"Must be one of: {', '.join(config.sortable)}"
                ),
                field="sort_by",
            )
        )

    for key in input_data.filters:
        if key not in config.filterable:
            errors.append(
                CatalogValidationError(
                    code="filter_invalid",
                    message=f"Cannot filter {config.table} by '{key}'",
                    field=key,
                )
            )

    return errors


def build_criteria(input_data: ListPageInput, config: TableConfig) -> Criteria:
    """Search term becomes a case-insensitive LIKE on the search field."""
    criteria: Criteria = {}
    search = input_data.search.strip()
    if search:
        criteria[config.search_field] = {"$like": f"%{search}%"}
    for key, value in input_data.filters.items():
        if value and value != ALL_VALUES:
            criteria[key] = value
    return criteria


# --- Catalog Service ---


class CatalogService(Generic[T]):
    """
    Catalog service.

    Lists one table a page at a time.
    """

    def __init__(
        self,
        repo: CatalogRepoPort,
        config: TableConfig,
        from_row: Callable[[dict[str, Any]], T],
        max_page_size: int = DEFAULT_MAX_PAGE_SIZE,
    ) -> None:
        self._repo = repo
        self._config = config
        self._from_row = from_row
        self._max_page_size = max_page_size

    @property
    def config(self) -> TableConfig:
        return self._config

    def list_page(
        self, input_data: ListPageInput
    ) -> tuple[PageResult[T] | None, list[CatalogValidationError]]:
        """
        List one page.

        Returns:
            Tuple of (result, errors). Result is None if validation fails.
        """
        errors = validate_list_input(input_data, self._config, self._max_page_size)
        if errors:
            return None, errors

        criteria = build_criteria(input_data, self._config)
        total_count = self._repo.count(criteria)

        if input_data.sort_by:
            order_by = input_data.sort_by
            order = input_data.sort_order
        else:
            order_by = self._config.default_order_by
            order = self._config.default_order

        rows = self._repo.find(
            criteria,
            FindOptions(
                limit=input_data.limit,
                offset=(input_data.page - 1) * input_data.limit,
                order_by=order_by,
                order=order,
            ),
        )

        return (
            PageResult(
                records=tuple(self._from_row(row) for row in rows),
                pagination=PaginationInfo.from_counts(
                    input_data.page, input_data.limit, total_count
                ),
            ),
            [],
        )

    def get(self, record_id: int) -> T | None:
        rows = self._repo.find({"id": record_id}, FindOptions(limit=1))
        if not rows:
            return None
        return self._from_row(rows[0])
