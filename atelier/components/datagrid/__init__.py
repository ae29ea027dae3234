"""
Datagrid component - Tabular presentation with sorting, pagination and search.

Table and card layouts, page-based and infinite-scroll pagination.
"""

from ._impl import (
    DEFAULT_BREAKPOINT_PX,
    GridQueryState,
    build_body,
    build_cards,
    build_grid_view,
    build_header_cells,
    build_pagination,
    default_cell_content,
    generate_page_tokens,
    is_mobile_width,
    next_sort,
    resolve_display_state,
    validate_columns,
    validate_pagination,
)
from .component import (
    DataGrid,
    GridRenderOutput,
    InfiniteFeed,
    InfiniteScrollTrigger,
    ResponsiveDataGrid,
    run_render,
)
from .models import (
    ACTIONS_KEY,
    ELLIPSIS,
    BodyCell,
    BodyView,
    CardField,
    CardView,
    CellRenderError,
    Column,
    DisplayState,
    GridAction,
    GridCallbacks,
    GridConfigError,
    GridProps,
    GridValidationError,
    GridView,
    HeaderCell,
    LayoutMode,
    PageButton,
    PageResult,
    PageSizeOption,
    PaginationInfo,
    PaginationView,
    RowView,
    SearchBox,
    SentinelView,
    SortOrder,
    SortState,
)
from .ports import SentinelPort, ViewportPort

__all__ = [
    # Shells
    "DataGrid",
    "ResponsiveDataGrid",
    "InfiniteScrollTrigger",
    "InfiniteFeed",
    "GridRenderOutput",
    "run_render",
    # Functional core
    "build_body",
    "build_cards",
    "build_grid_view",
    "build_header_cells",
    "build_pagination",
    "default_cell_content",
    "generate_page_tokens",
    "is_mobile_width",
    "next_sort",
    "resolve_display_state",
    "validate_columns",
    "validate_pagination",
    "GridQueryState",
    "DEFAULT_BREAKPOINT_PX",
    # Descriptors and state
    "Column",
    "PaginationInfo",
    "PageResult",
    "SortOrder",
    "SortState",
    "GridProps",
    "GridAction",
    "GridCallbacks",
    "ACTIONS_KEY",
    "ELLIPSIS",
    # Errors
    "GridValidationError",
    "GridConfigError",
    "CellRenderError",
    # View tree
    "BodyCell",
    "BodyView",
    "CardField",
    "CardView",
    "DisplayState",
    "GridView",
    "HeaderCell",
    "LayoutMode",
    "PageButton",
    "PageSizeOption",
    "PaginationView",
    "RowView",
    "SearchBox",
    "SentinelView",
    # Ports
    "SentinelPort",
    "ViewportPort",
]
