"""
Catalog component - Paged course and product listing.

Shell Layer - converts service results to outputs.
"""

from __future__ import annotations

from typing import TypeVar

from ._impl import CatalogService
from .models import (
    CatalogValidationError,
    GetRecordInput,
    ListPageInput,
    ListPageOutput,
    RecordOutput,
)

T = TypeVar("T")


def run_list_page(input_data: ListPageInput, service: CatalogService[T]) -> ListPageOutput[T]:
    """List one page of records."""
    result, errors = service.list_page(input_data)

    return ListPageOutput(
        result=result,
        errors=tuple(errors),
        success=result is not None,
    )


def run_get(input_data: GetRecordInput, service: CatalogService[T]) -> RecordOutput[T]:
    """Get a record by ID."""
    record = service.get(input_data.record_id)

    if record is None:
        return RecordOutput(
            record=None,
            errors=(
                CatalogValidationError(
                    code="record_not_found",
                    message=(
                        f"{service.config.table.rstrip('s').capitalize()} with ID "
                        f"{input_data.record_id} not found"
                    ),
                ),
            ),
            success=False,
        )

    return RecordOutput(record=record, errors=(), success=True)
