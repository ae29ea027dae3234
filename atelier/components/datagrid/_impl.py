"""
Datagrid functional core.

Builds the immutable view tree for table and card layouts. No I/O and no
state: the same props always produce the same view.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, TypeVar
from uuid import UUID

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
    GridConfigError,
    GridProps,
    GridValidationError,
    GridView,
    HeaderCell,
    LayoutMode,
    PageButton,
    PageSizeOption,
    PageToken,
    PaginationInfo,
    PaginationView,
    RowView,
    SearchBox,
    SentinelView,
    SortOrder,
    SortState,
)

T = TypeVar("T")

DEFAULT_BREAKPOINT_PX = 768

_MISSING = object()
_STRINGIFIABLE = (str, int, float, Decimal, date, UUID)


# --- Validation ---


def validate_columns(columns: Sequence[Column[Any]]) -> list[GridValidationError]:
    """Validate column descriptors for one table."""
    errors: list[GridValidationError] = []

    if not columns:
        errors.append(
            GridValidationError(
                code="columns_required",
                message="At least one column is required",
                field="columns",
            )
        )
        return errors

    seen: set[str] = set()
    for column in columns:
        if not column.key or not column.key.strip():
            errors.append(
                GridValidationError(
                    code="column_key_required",
                    message=f"Column '{column.label}' has no key",
                    field="key",
                )
            )
        elif column.key in seen:
            errors.append(
                GridValidationError(
                    code="column_key_duplicate",
                    message=f"Column key '{column.key}' is used more than once",
                    field="key",
                )
            )
        seen.add(column.key)

    return errors


def validate_pagination(info: PaginationInfo) -> list[GridValidationError]:
    """Check the invariants tying pagination fields together."""
    errors: list[GridValidationError] = []

    if info.page < 1:
        errors.append(
            GridValidationError(
                code="page_invalid", message="Page must be 1 or greater", field="page"
            )
        )
    if info.limit <= 0:
        errors.append(
            GridValidationError(
                code="limit_invalid", message="Limit must be positive", field="limit"
            )
        )
        return errors
    if info.total_count < 0:
        errors.append(
            GridValidationError(
                code="total_count_invalid",
                message="Total count cannot be negative",
                field="total_count",
            )
        )
        return errors

    expected = PaginationInfo.from_counts(info.page, info.limit, info.total_count)
    if info.total_pages != expected.total_pages:
        errors.append(
            GridValidationError(
                code="total_pages_mismatch",
                message=(
                    f"Total pages {info.total_pages} does not match "
                    f"{info.total_count} records at {info.limit} per page"
                ),
                field="total_pages",
            )
        )
    if info.has_next_page != (info.page < info.total_pages):
        errors.append(
            GridValidationError(
                code="has_next_page_mismatch",
                message="has_next_page must equal page < total_pages",
                field="has_next_page",
            )
        )
    if info.has_prev_page != (info.page > 1):
        errors.append(
            GridValidationError(
                code="has_prev_page_mismatch",
                message="has_prev_page must equal page > 1",
                field="has_prev_page",
            )
        )

    return errors


# --- Cells ---


def _lookup(record: Any, key: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(key, _MISSING)
    return getattr(record, key, _MISSING)


def default_cell_content(record: Any, key: str) -> str:
    """
    Render a field as plain text.

    Only scalar values are rendered by default; anything else needs an
    explicit render function on the column.

    Raises:
        CellRenderError: field missing or not a scalar.
    """
    value = _lookup(record, key)
    if value is _MISSING:
        raise CellRenderError(f"Record has no field '{key}'; give the column a render function")
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, _STRINGIFIABLE):
        return str(value)
    raise CellRenderError(
        f"Field '{key}' holds {type(value).__name__}; give the column a render function"
    )


def cell_content(column: Column[T], record: T, index: int) -> Any:
    if column.render is not None:
        return column.render(record, index)
    return default_cell_content(record, column.key)


# --- Display State ---


def resolve_display_state(error: str | None, loading: bool, count: int) -> DisplayState:
    """Error, then loading, then empty, then populated."""
    if error:
        return DisplayState.ERROR
    if loading:
        return DisplayState.LOADING
    if count == 0:
        return DisplayState.EMPTY
    return DisplayState.POPULATED


# --- Header ---


def next_sort(state: SortState, column: str) -> SortState:
    """Same column flips the order; a different column starts descending."""
    if state.sort_by == column:
        flipped = SortOrder.DESC if state.sort_order == SortOrder.ASC else SortOrder.ASC
        return SortState(sort_by=column, sort_order=flipped)
    return SortState(sort_by=column, sort_order=SortOrder.DESC)


def build_header_cells(
    columns: Sequence[Column[Any]],
    sort: SortState,
    sort_enabled: bool,
) -> tuple[HeaderCell, ...]:
    cells = []
    for column in columns:
        active = column.sortable and sort.sort_by == column.key
        clickable = column.sortable and sort_enabled
        indicator = None
        if active:
            indicator = "↑" if sort.sort_order == SortOrder.ASC else "↓"
        cells.append(
            HeaderCell(
                key=column.key,
                label=column.label,
                sortable=column.sortable,
                active=active,
                indicator=indicator,
                clickable=clickable,
                class_name=column.header_class_name,
                action=GridAction("sort", column.key) if clickable else None,
            )
        )
    return tuple(cells)


# --- Body ---


def _row_class(row_class_name: str | Callable[[T, int], str], record: T, index: int) -> str:
    if callable(row_class_name):
        return row_class_name(record, index)
    return row_class_name


def build_body(
    records: Sequence[T],
    columns: Sequence[Column[T]],
    *,
    loading: bool = False,
    empty_message: str = "No data found.",
    loading_message: str = "Loading...",
    row_clickable: bool = False,
    row_class_name: str | Callable[[T, int], str] = "",
) -> BodyView[T]:
    state = resolve_display_state(None, loading, len(records))
    if state == DisplayState.LOADING:
        return BodyView(state=state, column_count=len(columns), message=loading_message)
    if state == DisplayState.EMPTY:
        return BodyView(state=state, column_count=len(columns), message=empty_message)

    rows = tuple(
        RowView(
            record=record,
            index=index,
            cells=tuple(
                BodyCell(
                    key=column.key,
                    content=cell_content(column, record, index),
                    class_name=column.class_name,
                )
                for column in columns
            ),
            interactive=row_clickable,
            class_name=_row_class(row_class_name, record, index),
            action=GridAction("row", record) if row_clickable else None,
        )
        for index, record in enumerate(records)
    )
    return BodyView(state=state, column_count=len(columns), rows=rows)


# --- Pagination ---


def generate_page_tokens(page: int, total_pages: int) -> list[PageToken]:
    """
    Compressed page-number sequence around the current page.

    Shows two pages either side of the current one, plus the first and last
    pages with an ellipsis where the run is not contiguous.
    """
    tokens: list[PageToken] = []

    if page > 3:
        tokens.append(1)
        if page > 4:
            tokens.append(ELLIPSIS)

    tokens.extend(range(max(1, page - 2), min(total_pages, page + 2) + 1))

    if page < total_pages - 2:
        if page < total_pages - 3:
            tokens.append(ELLIPSIS)
        tokens.append(total_pages)

    return tokens


def build_pagination(
    info: PaginationInfo,
    *,
    page_size_enabled: bool = False,
    page_size_options: Sequence[int] = (5, 10, 25, 50),
    show_page_size_selector: bool = True,
    show_info: bool = True,
) -> PaginationView | None:
    """Pagination control, or None when there is a single page or none."""
    if info.total_pages <= 1:
        return None

    previous = PageButton(
        kind="previous",
        label="Previous",
        page=info.page - 1,
        enabled=info.has_prev_page,
        action=GridAction("page", info.page - 1) if info.has_prev_page else None,
    )
    next_button = PageButton(
        kind="next",
        label="Next",
        page=info.page + 1,
        enabled=info.has_next_page,
        action=GridAction("page", info.page + 1) if info.has_next_page else None,
    )

    pages = []
    for token in generate_page_tokens(info.page, info.total_pages):
        if isinstance(token, int):
            pages.append(
                PageButton(
                    kind="page",
                    label=str(token),
                    page=token,
                    enabled=True,
                    current=token == info.page,
                    action=GridAction("page", token),
                )
            )
        else:
            pages.append(PageButton(kind="ellipsis", label=token, page=None, enabled=False))

    size_options: tuple[PageSizeOption, ...] = ()
    if show_page_size_selector and page_size_enabled:
        size_options = tuple(
            PageSizeOption(
                size=size,
                selected=size == info.limit,
                action=GridAction("page_size", size),
            )
            for size in page_size_options
        )

    info_text = None
    if show_info:
        info_text = f"Page {info.page} of {info.total_pages} ({info.total_count} total)"

    return PaginationView(
        previous=previous,
        pages=tuple(pages),
        next=next_button,
        page_size_options=size_options,
        info=info_text,
    )


# --- Cards ---


def build_cards(
    records: Sequence[T],
    columns: Sequence[Column[T]],
    *,
    row_clickable: bool = False,
    class_name: str = "",
) -> tuple[CardView[T], ...]:
    """One card per record; the actions column goes once at the bottom."""
    actions_column = next((c for c in columns if c.key == ACTIONS_KEY), None)
    field_columns = [c for c in columns if c.key != ACTIONS_KEY]

    cards = []
    for index, record in enumerate(records):
        actions = None
        if actions_column is not None and actions_column.render is not None:
            actions = actions_column.render(record, index)
        cards.append(
            CardView(
                record=record,
                index=index,
                fields=tuple(
                    CardField(
                        key=column.key,
                        label=column.label,
                        content=cell_content(column, record, index),
                    )
                    for column in field_columns
                ),
                actions=actions,
                interactive=row_clickable,
                class_name=class_name,
                action=GridAction("row", record) if row_clickable else None,
            )
        )
    return tuple(cards)


# --- Viewport ---


def is_mobile_width(width: float, breakpoint: int = DEFAULT_BREAKPOINT_PX) -> bool:
    return width < breakpoint


# --- Grid ---


def build_grid_view(
    props: GridProps[T],
    *,
    search_text: str,
    layout: LayoutMode = LayoutMode.TABLE,
) -> GridView[T]:
    """
    Assemble the full grid view.

    Raises:
        GridConfigError: columns or pagination are invalid.
    """
    errors = validate_columns(props.columns)
    if props.pagination is not None:
        errors.extend(validate_pagination(props.pagination))
    if errors:
        raise GridConfigError(errors)

    if props.error:
        return GridView(layout=layout, state=DisplayState.ERROR, error=props.error)

    callbacks = props.callbacks
    title = props.title if props.show_title else None
    search = None
    if props.show_search and callbacks.on_search_change is not None:
        search = SearchBox(value=search_text, placeholder=props.search_placeholder)

    state = resolve_display_state(None, props.loading, len(props.records))
    row_clickable = callbacks.on_row_click is not None

    def paged() -> PaginationView | None:
        if props.pagination is None or callbacks.on_page_change is None:
            return None
        return build_pagination(
            props.pagination,
            page_size_enabled=callbacks.on_page_size_change is not None,
            page_size_options=props.page_size_options,
            show_page_size_selector=props.show_page_size_selector,
            show_info=props.show_pagination_info,
        )

    if layout == LayoutMode.TABLE:
        return GridView(
            layout=layout,
            state=state,
            title=title,
            search=search,
            headers=build_header_cells(props.columns, props.sort, callbacks.on_sort is not None),
            body=build_body(
                props.records,
                props.columns,
                loading=props.loading,
                empty_message=props.empty_message,
                loading_message=props.loading_message,
                row_clickable=row_clickable,
                row_class_name=props.row_class_name,
            ),
            pagination=paged(),
        )

    message = None
    cards: tuple[CardView[T], ...] = ()
    sentinel = None
    if state == DisplayState.LOADING:
        message = props.loading_message
    elif state == DisplayState.EMPTY:
        message = props.empty_message
    else:
        cards = build_cards(
            props.records,
            props.columns,
            row_clickable=row_clickable,
            class_name=props.card_class_name,
        )
        if props.enable_infinite_scroll:
            sentinel = SentinelView(
                fetching=props.is_fetching_next_page,
                message=props.loading_more_message if props.is_fetching_next_page else None,
            )

    return GridView(
        layout=layout,
        state=state,
        title=title,
        message=message,
        search=search,
        cards=cards,
        pagination=None if props.enable_infinite_scroll else paged(),
        sentinel=sentinel,
    )


# --- Query State ---


@dataclass(frozen=True)
class GridQueryState:
    """
    Filter, sort and page state owned by the page around a grid.

    Turns grid actions into the next query. Sorting, searching and resizing
    the page all go back to the first page.
    """

    page: int = 1
    limit: int = 10
    search: str = ""
    sort: SortState = field(default_factory=SortState)

    def apply(self, action: GridAction) -> GridQueryState:
        if action.kind == "sort":
            return replace(self, sort=next_sort(self.sort, action.value), page=1)
        if action.kind == "page":
            return replace(self, page=int(action.value))
        if action.kind == "page_size":
            return replace(self, limit=int(action.value), page=1)
        if action.kind == "search":
            return replace(self, search=str(action.value), page=1)
        return self

    def to_params(self) -> dict[str, str]:
        params = {"page": str(self.page), "limit": str(self.limit)}
        if self.search:
            params["search"] = self.search
        if self.sort.is_sorted:
            params["sort_by"] = self.sort.sort_by
            params["sort_order"] = self.sort.sort_order.value
        return params
