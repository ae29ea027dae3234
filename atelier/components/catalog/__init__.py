"""
Catalog component - Paged course and product listing.
"""

from ._impl import CatalogService, build_criteria, validate_list_input
from .component import run_get, run_list_page
from .models import (
    CatalogValidationError,
    Course,
    Criteria,
    FindOptions,
    GetRecordInput,
    ListPageInput,
    ListPageOutput,
    Product,
    RecordOutput,
    TableConfig,
)
from .ports import CatalogRepoPort

__all__ = [
    # Entry points
    "run_list_page",
    "run_get",
    # Input models
    "ListPageInput",
    "GetRecordInput",
    "FindOptions",
    "TableConfig",
    # Output models
    "ListPageOutput",
    "RecordOutput",
    "CatalogValidationError",
    # Records
    "Course",
    "Product",
    "Criteria",
    # Ports
    "CatalogRepoPort",
    # Service
    "CatalogService",
    "build_criteria",
    "validate_list_input",
]
